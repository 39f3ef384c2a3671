"""Configuration validator.

Validates a GoverageConfig against the rules ``go test`` applies to the
forwarded flags.
"""

import re

from ..profile.schema import Mode, VALID_MODES
from ..validation import ValidationError, ValidationResult
from .schema import GoverageConfig

DURATION_RE = re.compile(
    r"^[-+]?(0|((?=\.?[0-9])[0-9]*(\.[0-9]*)?(ns|us|µs|μs|ms|s|m|h))+)$"
)


def validate_config(config: GoverageConfig) -> ValidationResult:
    """Validate a configuration.

    Checks:
    - Output path and cover mode
    - Race detection compatibility with the cover mode
    - Format of the forwarded cpu, parallel and timeout values

    Args:
        config: Configuration to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    if not config.coverprofile:
        errors.append(ValidationError(
            path="coverprofile",
            message="'coverprofile' is required and must not be empty.",
        ))

    if config.covermode is not None and config.covermode not in VALID_MODES:
        errors.append(ValidationError(
            path="covermode",
            message=f"Invalid covermode '{config.covermode}'. Must be one of: {', '.join(VALID_MODES)}",
        ))

    # golang/go#12118
    if config.race and config.covermode and config.covermode != Mode.ATOMIC.value:
        errors.append(ValidationError(
            path="race",
            message=(
                f"cannot use race flag and covermode={config.covermode}. "
                "See more detail on golang/go#12118."
            ),
        ))

    _validate_forwarded(config, errors)

    for pattern in config.patterns:
        if "/vendor/" in pattern or pattern.startswith("vendor/"):
            warnings.append(ValidationError(
                path="patterns",
                message=f"Pattern '{pattern}' points into a vendor directory; its packages are skipped.",
                severity="warning",
            ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_forwarded(config: GoverageConfig, errors: list[ValidationError]) -> None:
    """Validate values passed through to ``go test``."""
    if config.cpu is not None:
        parts = config.cpu.split(",")
        if not all(p.strip().isdigit() and int(p) > 0 for p in parts):
            errors.append(ValidationError(
                path="cpu",
                message=f"Invalid cpu list '{config.cpu}'. Expected comma separated positive integers (e.g., '1,2,4').",
            ))

    if config.parallel is not None:
        if not config.parallel.isdigit() or int(config.parallel) <= 0:
            errors.append(ValidationError(
                path="parallel",
                message=f"Parallel must be a positive integer, got '{config.parallel}'.",
            ))

    if config.timeout is not None and not DURATION_RE.match(config.timeout):
        errors.append(ValidationError(
            path="timeout",
            message=f"Invalid timeout '{config.timeout}'. Expected a duration such as '10m' or '1h30m'.",
        ))
