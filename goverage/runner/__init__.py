"""Runner module - per-package execution and orchestration."""

from .executor import PackageExecutor, RunResult, RunStatus, build_test_args
from .result_collector import CollectedResult, ResultCollector
from .orchestrator import CoverageRun

__all__ = [
    "PackageExecutor",
    "RunResult",
    "RunStatus",
    "build_test_args",
    "CollectedResult",
    "ResultCollector",
    "CoverageRun",
]
