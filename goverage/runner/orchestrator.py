"""Coverage run orchestration.

Coordinates the full flow:
1. Resolve target patterns into packages
2. Run each package's tests, one at a time
3. Merge the profiles as runs finish
4. Write the merged profile
"""

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, Protocol

from ..config.schema import GoverageConfig
from ..discovery.resolver import PackageResolver
from ..discovery.toolchain import check_go, go_version
from ..errors import Failure, Fatal, MergeError, Outcome, ResolutionError, Success
from ..reporting.profile_writer import ProfileWriter
from .executor import PackageExecutor, RunResult
from .result_collector import ResultCollector


class Executor(Protocol):
    def execute(self, package: str) -> RunResult: ...


ExecutorFactory = Callable[[GoverageConfig, Sequence[str]], Executor]


class CoverageRun:
    """Runs every resolved package and writes one merged profile."""

    def __init__(
        self,
        config: GoverageConfig,
        resolver: Optional[PackageResolver] = None,
        executor_factory: Optional[ExecutorFactory] = None,
        writer: Optional[ProfileWriter] = None,
    ):
        """Initialize coverage run.

        Args:
            config: Run configuration.
            resolver: Package resolver (None = ``go list`` with the located toolchain).
            executor_factory: Builds the package executor from the config and
                the coverpkg list (None = ``go test``).
            writer: Profile writer (None = configured from ``config``).
        """
        self.config = config
        self._resolver = resolver
        self._executor_factory = executor_factory
        self.writer = writer or ProfileWriter(
            header_when_empty=config.header_when_empty,
            default_mode=config.mode,
        )
        self._go: Optional[str] = None

    def run(self) -> Outcome:
        """Execute the coverage run.

        Returns:
            Success, Failure when a package did not pass, or Fatal when
            nothing was written.
        """
        try:
            packages = self._resolve()
            executor = self._build_executor(packages) if packages else None
        except ResolutionError as e:
            return Fatal(str(e))

        collector = ResultCollector(self.config.mode)

        if executor is not None:
            try:
                for package in packages:
                    collector.collect(executor.execute(package))
            except MergeError as e:
                return Fatal(f"cannot merge coverage profiles: {e}")
        else:
            print("goverage: no packages to test", file=sys.stderr)

        merged = collector.merged()
        try:
            self.writer.write(merged, Path(self.config.coverprofile))
        except OSError as e:
            return Fatal(f"cannot write coverage profile {self.config.coverprofile}: {e}")

        if self.config.verbose:
            print(
                f"goverage: merged {merged.total_blocks} blocks in {len(merged.files)} files "
                f"from {collector.merger.run_count} runs into {self.config.coverprofile}",
                file=sys.stderr,
            )

        if collector.has_failures:
            return Failure(message=collector.result.summary())
        return Success(message=collector.result.summary())

    def _resolve(self) -> list[str]:
        resolver = self._resolver or PackageResolver(self._locate_go())
        return resolver.resolve_all(self.config.patterns)

    def _build_executor(self, packages: Sequence[str]) -> Executor:
        if self._executor_factory is not None:
            return self._executor_factory(self.config, packages)
        return PackageExecutor(self.config, packages, go=self._locate_go())

    def _locate_go(self) -> str:
        if self._go is None:
            self._go = check_go(self.config.go)
            if self.config.verbose:
                print(f"goverage: using {go_version(self._go) or self._go}", file=sys.stderr)
        return self._go
