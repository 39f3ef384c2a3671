"""Package resolver.

Expands target patterns into Go import paths with ``go list``.
"""

import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from ..errors import ResolutionError

DEFAULT_PATTERN = "./..."


def is_vendored(package: str) -> bool:
    """Whether an import path points into a vendor directory."""
    return "/vendor/" in package or package.startswith("vendor/")


class PackageResolver:
    """Resolves package patterns with ``go list``."""

    def __init__(self, go: str = "go", cwd: Optional[Path] = None):
        """Initialize package resolver.

        Args:
            go: go executable.
            cwd: Directory to resolve patterns in. None = current directory.
        """
        self.go = go
        self.cwd = Path(cwd) if cwd else None

    def resolve(self, pattern: str = "") -> list[str]:
        """Expand one pattern into non-vendored import paths.

        Args:
            pattern: Package pattern. Empty means every package under the
                current root.

        Returns:
            Import paths in ``go list`` order.

        Raises:
            ResolutionError: If ``go list`` cannot run or fails.
        """
        pattern = pattern or DEFAULT_PATTERN

        try:
            result = subprocess.run(
                [self.go, "list", pattern],
                cwd=str(self.cwd) if self.cwd else None,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ResolutionError(f"failed to run 'go list {pattern}': {e}") from e

        if result.returncode != 0:
            raise ResolutionError(
                f"'go list {pattern}' failed with exit status {result.returncode}",
                output=result.stderr or result.stdout,
            )

        return [
            line.strip()
            for line in result.stdout.splitlines()
            if line.strip() and not is_vendored(line.strip())
        ]

    def resolve_all(self, patterns: Iterable[str]) -> list[str]:
        """Expand several patterns, dropping repeated packages.

        No patterns resolves every package under the current root.
        """
        patterns = list(patterns) or [""]
        packages: list[str] = []
        seen: set[str] = set()

        for pattern in patterns:
            for package in self.resolve(pattern):
                if package not in seen:
                    seen.add(package)
                    packages.append(package)

        return packages
