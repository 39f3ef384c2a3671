"""Root conftest.py for test configuration.

Ensures the local goverage package takes priority over any installed one,
and provides shared profile fixtures.
"""

import sys
from pathlib import Path

import pytest

_root_dir = Path(__file__).parent.parent
if str(_root_dir) not in sys.path:
    sys.path.insert(0, str(_root_dir))

from goverage.profile.parser import parse_profile_text  # noqa: E402

RUN_A = """\
mode: count
example.com/m/a.go:3.10,5.2 1 1
example.com/m/a.go:7.10,9.2 1 0
example.com/m/b.go:3.10,5.2 2 0
"""

RUN_B = """\
mode: count
example.com/m/a.go:3.10,5.2 1 2
example.com/m/a.go:7.10,9.2 1 1
example.com/m/c.go:1.1,2.2 1 4
"""

RUN_C = """\
mode: count
example.com/m/b.go:3.10,5.2 2 3
example.com/m/c.go:1.1,2.2 1 0
"""


@pytest.fixture
def profile_text():
    """Build profile text from a mode and block lines."""

    def _make(mode: str, *lines: str) -> str:
        return "".join([f"mode: {mode}\n", *(f"{line}\n" for line in lines)])

    return _make


@pytest.fixture
def runs():
    """Three parsed count-mode runs with overlapping files."""
    return [parse_profile_text(text) for text in (RUN_A, RUN_B, RUN_C)]


@pytest.fixture
def as_mode():
    """Re-declare profile text under another mode."""

    def _convert(text: str, mode: str) -> str:
        _, _, rest = text.partition("\n")
        return f"mode: {mode}\n{rest}"

    return _convert


@pytest.fixture
def run_texts():
    """Raw profile text of the three runs behind ``runs``."""
    return [RUN_A, RUN_B, RUN_C]
