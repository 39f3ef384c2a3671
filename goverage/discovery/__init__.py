"""Discovery module - go toolchain and package resolution."""

from .resolver import DEFAULT_PATTERN, PackageResolver, is_vendored
from .toolchain import GO_ENV_VAR, check_go, find_go, go_version

__all__ = [
    "DEFAULT_PATTERN",
    "PackageResolver",
    "is_vendored",
    "GO_ENV_VAR",
    "check_go",
    "find_go",
    "go_version",
]
