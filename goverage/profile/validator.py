"""Structural checks run before profiles are merged.

Every run must declare the same mode, and a file measured by several runs
must have the same block layout in each of them.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

from ..validation import ValidationError, ValidationResult
from .schema import Block, Mode, Profile


def validate_run(
    profiles: Sequence[Profile],
    mode: Optional[Mode],
    reference: Mapping[str, Sequence[Block]],
    source: str = "<run>",
) -> ValidationResult:
    """Validate one run's profiles against what has been merged so far.

    Args:
        profiles: Per-file profiles of the run.
        mode: Mode every run must declare, None if not yet known.
        reference: Block lists already merged, by file name.
        source: Run identifier for error paths.

    Returns:
        ValidationResult with errors.
    """
    errors: list[ValidationError] = []

    _check_modes(profiles, mode, source, errors)

    seen: set[str] = set()
    for profile in profiles:
        path = f"{source}/{profile.file_name}"
        if profile.file_name in seen:
            errors.append(ValidationError(
                path=path,
                message="file appears more than once in a single run.",
            ))
            continue
        seen.add(profile.file_name)

        expected = reference.get(profile.file_name)
        if expected is not None:
            errors.extend(compare_blocks(expected, profile.blocks, path))

    return ValidationResult(valid=len(errors) == 0, errors=errors)


def validate_profiles(
    runs: Sequence[Sequence[Profile]],
    mode: Optional[Mode] = None,
) -> ValidationResult:
    """Validate a whole collection of runs before merging any of them.

    The first run measuring a file defines that file's expected layout.
    """
    errors: list[ValidationError] = []
    reference: dict[str, Sequence[Block]] = {}

    for i, profiles in enumerate(runs):
        if not profiles:
            continue
        result = validate_run(profiles, mode, reference, source=f"run[{i}]")
        errors.extend(result.errors)
        if mode is None:
            mode = profiles[0].mode
        for profile in profiles:
            reference.setdefault(profile.file_name, profile.blocks)

    return ValidationResult(valid=len(errors) == 0, errors=errors)


def compare_blocks(
    expected: Sequence[Block],
    actual: Sequence[Block],
    path: str,
) -> list[ValidationError]:
    """Compare two block lists of the same file position by position."""
    if len(expected) != len(actual):
        return [ValidationError(
            path=path,
            message=f"block count mismatch: expected {len(expected)}, got {len(actual)}.",
        )]

    errors = []
    for i, (want, got) in enumerate(zip(expected, actual)):
        if not want.same_shape(got):
            errors.append(ValidationError(
                path=f"{path}[{i}]",
                message=(
                    f"block {_describe(got)} does not match {_describe(want)}. "
                    "Sources differ between runs."
                ),
            ))
            # One mismatch already means the layouts differ.
            break
    return errors


def _check_modes(
    profiles: Sequence[Profile],
    mode: Optional[Mode],
    source: str,
    errors: list[ValidationError],
) -> None:
    for profile in profiles:
        if mode is None:
            mode = profile.mode
        elif profile.mode != mode:
            errors.append(ValidationError(
                path=f"{source}/{profile.file_name}",
                message=f"mode mismatch: expected {mode.value}, got {profile.mode.value}.",
            ))


def _describe(block: Block) -> str:
    return (
        f"{block.start_line}.{block.start_col},{block.end_line}.{block.end_col}"
        f" ({block.num_stmt} stmts)"
    )
