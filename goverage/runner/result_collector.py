"""Result collector for package runs.

Folds each run's profile into the merge and keeps the pass/fail tally.
"""

import sys
from dataclasses import dataclass, field
from typing import Optional

from ..profile.merger import ProfileMerger
from ..profile.schema import MergedProfile, Mode
from .executor import RunResult, RunStatus


@dataclass
class CollectedResult:
    """Tally of package outcomes."""
    statuses: dict[str, RunStatus] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def add(self, result: RunResult) -> None:
        self.statuses[result.package] = result.status
        if result.error:
            self.errors.append(result.error)

    def count(self, status: RunStatus) -> int:
        return sum(1 for s in self.statuses.values() if s == status)

    @property
    def failed_packages(self) -> list[str]:
        return [
            package for package, status in self.statuses.items()
            if status in (RunStatus.FAILED, RunStatus.EXECUTION_ERROR)
        ]

    @property
    def has_failures(self) -> bool:
        return len(self.failed_packages) > 0

    def summary(self) -> str:
        return (
            f"{len(self.statuses)} packages: "
            f"{self.count(RunStatus.PASSED)} passed, "
            f"{self.count(RunStatus.FAILED)} failed, "
            f"{self.count(RunStatus.NO_TESTS)} without tests, "
            f"{self.count(RunStatus.EXECUTION_ERROR)} errors"
        )


class ResultCollector:
    """Collects package run results into one merged profile."""

    def __init__(self, mode: Optional[Mode] = None):
        """Initialize result collector.

        Args:
            mode: Mode every contributed profile must declare. None = any,
                as long as all runs agree.
        """
        self.merger = ProfileMerger(mode)
        self.result = CollectedResult()

    def collect(self, run: RunResult) -> None:
        """Record a run and merge its profile.

        Raises:
            MergeError: If the run's profile cannot be merged.
        """
        self.result.add(run)

        if run.status == RunStatus.EXECUTION_ERROR:
            # The package is skipped; the rest of the run continues.
            print(f"goverage: got error for package {run.package!r}: {run.error}", file=sys.stderr)
            return

        if run.contributes:
            self.merger.add(run.profiles, source=run.package)

    @property
    def has_failures(self) -> bool:
        return self.result.has_failures

    def merged(self) -> MergedProfile:
        return self.merger.result()
