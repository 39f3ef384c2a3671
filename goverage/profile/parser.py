"""Coverage profile parser.

Reads profiles written by ``go test -coverprofile``:

    mode: set
    example.com/pkg/file.go:10.2,12.16 2 1
"""

import re
from dataclasses import replace
from pathlib import Path
from typing import Union

from ..errors import ProfileParseError
from .schema import Block, Mode, Profile, VALID_MODES

MODE_PREFIX = "mode: "

BLOCK_RE = re.compile(
    r"^(.+):([0-9]+)\.([0-9]+),([0-9]+)\.([0-9]+) ([0-9]+) ([0-9]+)$"
)


def parse_profiles(file_path: Union[str, Path]) -> list[Profile]:
    """Parse a coverage profile file.

    Args:
        file_path: Path to the profile written by ``go test``.

    Returns:
        One Profile per file, sorted by file name.

    Raises:
        FileNotFoundError: If the profile file doesn't exist.
        ProfileParseError: If the content is malformed.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Coverage profile not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        text = f.read()

    return parse_profile_text(text, source=str(file_path))


def parse_profile_text(text: str, source: str = "<inline>") -> list[Profile]:
    """Parse coverage profile text.

    Blocks of a file are ordered by start position, and repeated samples of
    the same span are folded together the way the Go ``cover`` package does.

    Args:
        text: Profile content.
        source: Source identifier for error messages.

    Returns:
        One Profile per file, sorted by file name. Empty text gives an
        empty list.

    Raises:
        ProfileParseError: If the mode line or a block line is malformed.
    """
    mode = None
    files: dict[str, list[Block]] = {}

    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue

        if line.startswith(MODE_PREFIX) or line == MODE_PREFIX.rstrip():
            line_mode = _parse_mode(line, source, lineno)
            if mode is None:
                mode = line_mode
            elif line_mode != mode:
                raise ProfileParseError(
                    f"mode changed from {mode.value} to {line_mode.value}",
                    source=source,
                    line=lineno,
                )
            continue

        if mode is None:
            raise ProfileParseError(f"bad mode line: {line!r}", source=source, line=lineno)

        file_name, block = _parse_block(line, source, lineno)
        files.setdefault(file_name, []).append(block)

    return [
        Profile(file_name=name, mode=mode, blocks=_fold_blocks(files[name], mode, source))
        for name in sorted(files)
    ]


def _parse_mode(line: str, source: str, lineno: int) -> Mode:
    value = line[len(MODE_PREFIX):].strip()
    if value not in VALID_MODES:
        raise ProfileParseError(
            f"bad mode line: {line!r}. Mode must be one of: {', '.join(VALID_MODES)}",
            source=source,
            line=lineno,
        )
    return Mode(value)


def _parse_block(line: str, source: str, lineno: int) -> tuple[str, Block]:
    match = BLOCK_RE.match(line.rstrip("\r"))
    if not match:
        raise ProfileParseError(
            f"line {line!r} doesn't match expected format: "
            "name.go:line.column,line.column numberOfStatements count",
            source=source,
            line=lineno,
        )

    start_line, start_col, end_line, end_col, num_stmt, count = (
        int(g) for g in match.groups()[1:]
    )
    return match.group(1), Block(
        start_line=start_line,
        start_col=start_col,
        end_line=end_line,
        end_col=end_col,
        num_stmt=num_stmt,
        count=count,
    )


def _fold_blocks(blocks: list[Block], mode: Mode, source: str) -> list[Block]:
    """Sort blocks by start position and fold samples of the same span."""
    ordered = sorted(blocks, key=lambda b: (b.start_line, b.start_col))
    folded: list[Block] = []

    for block in ordered:
        if folded and folded[-1].span == block.span:
            last = folded[-1]
            if last.num_stmt != block.num_stmt:
                raise ProfileParseError(
                    f"inconsistent NumStmt: changed from {last.num_stmt} to {block.num_stmt}",
                    source=source,
                )
            if mode == Mode.SET:
                count = 1 if (last.count or block.count) else 0
            else:
                count = last.count + block.count
            folded[-1] = replace(last, count=count)
            continue
        folded.append(block)

    return folded
