"""Coverage profile data models.

Defines the block and profile types read from and written to Go coverage
profile files.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Mode(str, Enum):
    """Supported accumulation modes."""
    SET = "set"
    COUNT = "count"
    ATOMIC = "atomic"


VALID_MODES = [e.value for e in Mode]


@dataclass(frozen=True)
class Block:
    """A covered source span."""
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    @property
    def span(self) -> tuple[int, int, int, int]:
        """Start and end position of the block."""
        return (self.start_line, self.start_col, self.end_line, self.end_col)

    def same_shape(self, other: "Block") -> bool:
        """Whether both blocks describe the same instrumented statement range."""
        return self.span == other.span and self.num_stmt == other.num_stmt


@dataclass
class Profile:
    """Coverage data for one source file from one run."""
    file_name: str
    mode: Mode
    blocks: list[Block] = field(default_factory=list)

    def __post_init__(self):
        self.mode = Mode(self.mode)


@dataclass
class MergedProfile:
    """Merged coverage for every file seen across runs."""
    mode: Optional[Mode] = None
    files: dict[str, list[Block]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.files

    @property
    def total_blocks(self) -> int:
        return sum(len(blocks) for blocks in self.files.values())

    def file_names(self) -> list[str]:
        """File names in output order."""
        return sorted(self.files)

    def profiles(self) -> list[Profile]:
        """Per-file profiles sorted by file name."""
        if self.mode is None:
            return []
        return [
            Profile(file_name=name, mode=self.mode, blocks=list(self.files[name]))
            for name in self.file_names()
        ]
