"""Error types and run outcomes.

Exceptions are raised where a problem is detected. The orchestrator turns
them into one of the outcome values below, and the CLI maps that outcome to
the process exit status.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .validation import ValidationResult

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class GoverageError(Exception):
    """Base class for all goverage errors."""


class UsageError(GoverageError):
    """Required configuration is missing."""


class ConfigError(GoverageError):
    """Configuration file is invalid or options contradict each other."""

    def __init__(self, message: str, validation: Optional[ValidationResult] = None):
        super().__init__(message)
        self.validation = validation


class ResolutionError(GoverageError):
    """Target patterns could not be expanded into packages."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output

    def __str__(self) -> str:
        message = super().__str__()
        if self.output:
            return f"{message}\n{self.output.rstrip()}"
        return message


class ExecutionError(GoverageError):
    """The test process for one package could not start or complete."""


class ProfileParseError(GoverageError):
    """Coverage profile text does not follow the profile format."""

    def __init__(self, message: str, source: str = "<inline>", line: int = 0):
        self.source = source
        self.line = line
        location = f"{source}:{line}" if line else source
        super().__init__(f"{location}: {message}")


class MergeError(GoverageError):
    """Profiles cannot be merged: modes or block structures disagree."""

    def __init__(self, message: str, validation: Optional[ValidationResult] = None):
        super().__init__(message)
        self.validation = validation

    @classmethod
    def from_validation(cls, result: ValidationResult) -> "MergeError":
        return cls(str(result), validation=result)


@dataclass(frozen=True)
class Success:
    """All packages passed and the merged profile was written."""
    exit_code: int = EXIT_SUCCESS
    message: str = ""


@dataclass(frozen=True)
class Failure:
    """The profile was written but at least one package did not pass."""
    exit_code: int = EXIT_FAILURE
    message: str = ""


@dataclass(frozen=True)
class Fatal:
    """The run was aborted and no profile was written."""
    message: str
    exit_code: int = EXIT_FAILURE


Outcome = Union[Success, Failure, Fatal]
