"""Run configuration model."""

from dataclasses import dataclass
from typing import Optional

from ..profile.schema import Mode, VALID_MODES

DEFAULT_COVERPROFILE = "coverage.out"
CONFIG_FILE_NAMES = (".goverage.yaml", ".goverage.yml")


@dataclass(frozen=True)
class GoverageConfig:
    """Options for one goverage invocation.

    Built once from defaults, the config file and command line flags, then
    passed to everything that needs it.
    """
    coverprofile: str = DEFAULT_COVERPROFILE
    covermode: Optional[str] = None
    cpu: Optional[str] = None
    parallel: Optional[str] = None
    timeout: Optional[str] = None
    short: bool = False
    verbose: bool = False
    trace: bool = False
    race: bool = False
    go: Optional[str] = None
    header_when_empty: bool = False
    patterns: tuple[str, ...] = ()

    @property
    def mode(self) -> Optional[Mode]:
        """Configured accumulation mode, None when left to ``go test``."""
        if self.covermode in VALID_MODES:
            return Mode(self.covermode)
        return None


CONFIG_FIELDS = set(GoverageConfig.__dataclass_fields__)
