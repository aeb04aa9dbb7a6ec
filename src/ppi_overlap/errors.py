"""Error taxonomy and explicit stage outcomes.

Two failure policies coexist in the pipeline:

- ``FileAccessError``: the input of a stage is missing or unreadable. The stage
  degrades to an empty result and downstream stages keep running.
- ``ParseError``: a required numeric field is malformed. The stage aborts and
  the error propagates to the caller.

Mapping misses and self-interactions are not errors; they are counted and
reported by the resolver.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class PipelineError(Exception):
    """Base class for pipeline errors."""


class FileAccessError(PipelineError):
    """Input file is missing or cannot be read."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ParseError(PipelineError):
    """Required field could not be parsed; the whole load is aborted."""

    def __init__(self, source: str, column: str, value: Optional[str], row: Optional[int] = None):
        self.source = source
        self.column = column
        self.value = value
        self.row = row
        location = f" (row {row})" if row is not None else ""
        super().__init__(
            f"Non-numeric value {value!r} in column '{column}' of {source}{location}"
        )


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of a pipeline stage.

    Attributes:
        value: Stage output. On failure this is the stage's empty result,
            so callers can continue with downstream stages.
        error: The FileAccessError that degraded the stage, or None on success.
        other_errors: Further FileAccessErrors when the stage read several
            inputs and more than one was unreadable.
    """
    value: T
    error: Optional[FileAccessError] = None
    other_errors: tuple[FileAccessError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def errors(self) -> list[FileAccessError]:
        """Every error that degraded the stage, first one first."""
        if self.error is None:
            return []
        return [self.error, *self.other_errors]

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FileAccessError, empty: T) -> "StageResult[T]":
        return cls(value=empty, error=error)

    @classmethod
    def combine(cls, value: T, *results: "StageResult") -> "StageResult[T]":
        """Wrap ``value`` with the errors of all the input stages it was built from."""
        errors = [e for result in results for e in result.errors]
        if not errors:
            return cls.success(value)
        return cls(value=value, error=errors[0], other_errors=tuple(errors[1:]))
