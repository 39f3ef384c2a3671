"""Go toolchain locator.

Finds the ``go`` executable used for ``go list`` and ``go test``.
"""

import os
import re
import shutil
import subprocess
from typing import Optional, Tuple

from ..errors import ResolutionError

GO_ENV_VAR = "GOVERAGE_GO"
DOWNLOAD_URL = "https://go.dev/dl/"


def _parse_version(version_string: str) -> Optional[Tuple[int, int]]:
    """Parse 'go version go1.22.3 linux/amd64' into (major, minor)."""
    match = re.search(r"go(\d+)\.(\d+)", version_string)
    if match:
        return int(match.group(1)), int(match.group(2))
    return None


def find_go(explicit: Optional[str] = None) -> Optional[str]:
    """Find the go executable.

    Searches in order:
    1. The explicitly configured path
    2. GOVERAGE_GO environment variable
    3. ``go`` on PATH

    Returns:
        Path to the executable, or None if not found.
    """
    candidates = [explicit, os.environ.get(GO_ENV_VAR), "go"]

    for cmd in candidates:
        if not cmd:
            continue
        path = shutil.which(cmd)
        if path:
            return path

    return None


def check_go(explicit: Optional[str] = None) -> str:
    """Return the go executable or fail.

    Raises:
        ResolutionError: If no go executable is found.
    """
    go = find_go(explicit)

    if not go:
        raise ResolutionError(
            f"go toolchain not found.\n"
            f"Please install from {DOWNLOAD_URL}\n"
            f"Or set {GO_ENV_VAR} environment variable to your go executable."
        )

    return go


def go_version(go: str) -> Optional[str]:
    """Return the ``go version`` line, or None if it cannot be read."""
    try:
        result = subprocess.run(
            [go, "version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (subprocess.TimeoutExpired, OSError):
        return None

    output = result.stdout.strip() or result.stderr.strip()
    if _parse_version(output):
        return output
    return None
