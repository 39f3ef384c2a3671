"""Profile merge engine.

Folds the coverage profiles of many runs into one. Blocks of a file are
matched by position, so every run measuring a file must have been built
from the same source.
"""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Optional, Union

from ..errors import MergeError
from .schema import Block, MergedProfile, Mode, Profile
from .validator import validate_profiles, validate_run


class ProfileMerger:
    """Accumulates run profiles into a merged profile.

    The merger owns its block lists. Profiles passed to ``add`` are never
    modified.
    """

    def __init__(self, mode: Optional[Union[Mode, str]] = None):
        """Initialize the merger.

        Args:
            mode: Mode all runs must declare. None accepts whichever mode the
                first contributing run declares.
        """
        self._mode = Mode(mode) if mode else None
        self._files: dict[str, list[Block]] = {}
        self._runs = 0

    @property
    def mode(self) -> Optional[Mode]:
        return self._mode

    @property
    def run_count(self) -> int:
        """Number of runs that contributed at least one file."""
        return self._runs

    def add(self, profiles: Sequence[Profile], source: str = "<run>") -> None:
        """Fold one run's profiles into the accumulator.

        The run is validated in full before anything is folded, so a
        rejected run leaves the accumulator untouched.

        Raises:
            MergeError: If the run's mode or block layout disagrees with
                the runs merged so far.
        """
        if not profiles:
            return

        result = validate_run(profiles, self._mode, self._files, source=source)
        if not result.valid:
            raise MergeError.from_validation(result)

        mode = profiles[0].mode
        for profile in profiles:
            current = self._files.get(profile.file_name)
            if current is None:
                self._files[profile.file_name] = [
                    replace(b, count=combine_counts(mode, 0, b.count))
                    for b in profile.blocks
                ]
            else:
                self._files[profile.file_name] = [
                    replace(a, count=combine_counts(mode, a.count, b.count))
                    for a, b in zip(current, profile.blocks)
                ]

        self._mode = mode
        self._runs += 1

    def result(self) -> MergedProfile:
        """Snapshot of the merged profile, files in name order."""
        return MergedProfile(
            mode=self._mode,
            files={name: list(self._files[name]) for name in sorted(self._files)},
        )


def combine_counts(mode: Mode, merged: int, count: int) -> int:
    """Combine two coverage counts of the same block."""
    if mode == Mode.SET:
        return 1 if (merged or count) else 0
    return merged + count


def merge_profiles(
    runs: Iterable[Sequence[Profile]],
    mode: Optional[Union[Mode, str]] = None,
) -> MergedProfile:
    """Merge the profiles of several runs.

    All runs are validated before any of them is folded.

    Args:
        runs: Per-run profile lists, in run order.
        mode: Mode all runs must declare, or None to take it from the runs.

    Returns:
        The merged profile. Empty when no run produced a profile.

    Raises:
        MergeError: If modes or block layouts disagree.
    """
    runs = [list(profiles) for profiles in runs]
    expected = Mode(mode) if mode else None

    result = validate_profiles(runs, expected)
    if not result.valid:
        raise MergeError.from_validation(result)

    merger = ProfileMerger(expected)
    for i, profiles in enumerate(runs):
        merger.add(profiles, source=f"run[{i}]")
    return merger.result()
