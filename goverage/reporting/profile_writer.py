"""Coverage profile writer.

Serializes a merged profile in the format ``go tool cover`` reads.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Union

from ..profile.schema import Block, MergedProfile, Mode, Profile

# name.go:line.column,line.column numberOfStatements count
BLOCK_FORMAT = "{name}:{b.start_line}.{b.start_col},{b.end_line}.{b.end_col} {b.num_stmt} {b.count}\n"


class ProfileWriter:
    """Writes merged coverage profiles."""

    def __init__(self, header_when_empty: bool = False, default_mode: Optional[Mode] = None):
        """Initialize profile writer.

        Args:
            header_when_empty: Write a mode line even when nothing was merged.
            default_mode: Mode named by that header. Defaults to ``set``.
        """
        self.header_when_empty = header_when_empty
        self.default_mode = Mode(default_mode) if default_mode else Mode.SET

    def generate(self, merged: MergedProfile) -> str:
        """Render a merged profile as profile text.

        Args:
            merged: Result of the merge.

        Returns:
            Profile text. Empty when nothing was merged, unless
            ``header_when_empty`` is set.
        """
        if merged.is_empty or merged.mode is None:
            if self.header_when_empty:
                return format_header(merged.mode or self.default_mode)
            return ""
        return format_profiles(merged.profiles())

    def save(self, text: str, path: Union[str, Path]) -> Path:
        """Write profile text to a file.

        Args:
            text: Rendered profile.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        if path.parent != Path("."):
            path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)

        return path

    def write(self, merged: MergedProfile, path: Union[str, Path]) -> Path:
        """Render and save a merged profile."""
        return self.save(self.generate(merged), path)


def format_header(mode: Mode) -> str:
    return f"mode: {Mode(mode).value}\n"


def format_block(name: str, block: Block) -> str:
    return BLOCK_FORMAT.format(name=name, b=block)


def format_profiles(profiles: Sequence[Profile]) -> str:
    """Render per-file profiles sharing one mode.

    The header names the mode of the first profile. Profiles are written in
    the order given.
    """
    if not profiles:
        return ""

    parts = [format_header(profiles[0].mode)]
    for profile in profiles:
        parts.extend(format_block(profile.file_name, b) for b in profile.blocks)
    return "".join(parts)
