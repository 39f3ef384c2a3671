"""Per-package test executor.

Runs ``go test`` with a coverage profile for one package and reports what
the run produced:

- passed: tests passed, profile written
- no-tests: tests passed, no profile written
- failed: tests failed, a partial profile was written
- execution-error: ``go test`` could not run, or left no usable profile
"""

import subprocess
import sys
import tempfile
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..config.schema import GoverageConfig
from ..errors import ExecutionError, ProfileParseError
from ..profile.parser import parse_profiles
from ..profile.schema import Profile

PROFILE_NAME = "coverage.out"


class RunStatus(str, Enum):
    """Terminal state of one package run."""
    NO_TESTS = "no-tests"
    PASSED = "passed"
    FAILED = "failed"
    EXECUTION_ERROR = "execution-error"


@dataclass
class RunResult:
    """Result of running one package's tests."""
    package: str
    status: RunStatus
    profiles: Optional[list[Profile]] = None
    error: Optional[str] = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.status in (RunStatus.NO_TESTS, RunStatus.PASSED)

    @property
    def contributes(self) -> bool:
        """Whether this run has a profile to merge."""
        return self.status != RunStatus.EXECUTION_ERROR and self.profiles is not None


def build_test_args(config: GoverageConfig, coverpkg: Sequence[str]) -> list[str]:
    """Build the ``go test`` flags shared by every package run.

    coverpkg must not be empty.
    """
    args = ["-coverpkg", ",".join(coverpkg)]
    if config.covermode:
        args += ["-covermode", config.covermode]
    if config.cpu:
        args += ["-cpu", config.cpu]
    if config.parallel:
        args += ["-parallel", config.parallel]
    if config.timeout:
        args += ["-timeout", config.timeout]
    if config.short:
        args.append("-short")
    if config.verbose:
        args.append("-v")
    if config.trace:
        args.append("-x")
    if config.race:
        args.append("-race")
    return args


class PackageExecutor:
    """Runs ``go test`` for one package at a time."""

    def __init__(
        self,
        config: GoverageConfig,
        coverpkg: Sequence[str],
        go: str = "go",
        cwd: Optional[Path] = None,
    ):
        """Initialize package executor.

        Args:
            config: Run configuration.
            coverpkg: Every package whose coverage is measured in each run.
            go: go executable.
            cwd: Directory to run tests in. None = current directory.
        """
        self.config = config
        self.go = go
        self.cwd = Path(cwd) if cwd else None
        self._test_args = build_test_args(config, coverpkg)

    def execute(self, package: str) -> RunResult:
        """Run the tests of one package.

        The temporary profile is removed before this returns.

        Returns:
            RunResult for the package. Never raises for test or process
            failures.
        """
        start_time = time.time()

        try:
            with tempfile.TemporaryDirectory(prefix="goverage") as tmp_dir:
                result = self._run(package, Path(tmp_dir) / PROFILE_NAME)
        except ExecutionError as e:
            result = RunResult(package=package, status=RunStatus.EXECUTION_ERROR, error=str(e))
        except OSError as e:
            result = RunResult(
                package=package,
                status=RunStatus.EXECUTION_ERROR,
                error=f"temporary profile for {package}: {e}",
            )

        result.duration_ms = int((time.time() - start_time) * 1000)
        return result

    def command(self, package: str, profile_path: Path) -> list[str]:
        return [self.go, "test", package, "-coverprofile", str(profile_path), *self._test_args]

    def _run(self, package: str, profile_path: Path) -> RunResult:
        cmd = self.command(package, profile_path)

        try:
            if self.config.verbose:
                completed = subprocess.run(cmd, cwd=self._cwd())
            else:
                # Test output is not guaranteed to be valid UTF-8.
                completed = subprocess.run(
                    cmd,
                    cwd=self._cwd(),
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                )
        except OSError as e:
            raise ExecutionError(f"failed to run 'go test {package}': {e}") from e

        if completed.returncode != 0:
            if not self.config.verbose:
                self._echo_output(completed)
            # go test can write a profile even when tests fail.
            if not profile_path.exists():
                raise ExecutionError(
                    f"failed to run 'go test {package}': exit status {completed.returncode}"
                )
            status = RunStatus.FAILED
        elif not profile_path.exists():
            return RunResult(package=package, status=RunStatus.NO_TESTS)
        else:
            status = RunStatus.PASSED

        try:
            profiles = parse_profiles(profile_path)
        except (ProfileParseError, UnicodeDecodeError) as e:
            raise ExecutionError(f"invalid coverage profile for {package}: {e}") from e
        except OSError as e:
            raise ExecutionError(f"cannot read coverage profile for {package}: {e}") from e

        return RunResult(package=package, status=status, profiles=profiles)

    def _cwd(self) -> Optional[str]:
        return str(self.cwd) if self.cwd else None

    @staticmethod
    def _echo_output(completed: subprocess.CompletedProcess) -> None:
        """Show captured output of a failed run."""
        if completed.stdout:
            sys.stdout.write(completed.stdout)
            sys.stdout.flush()
        if completed.stderr:
            sys.stderr.write(completed.stderr)
            sys.stderr.flush()
