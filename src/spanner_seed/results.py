"""
spanner_seed.results

Tagged step results shared by every workflow step.

Responsibilities:
- Classify failures into a small, stable set of error kinds.
- Carry either a value or a `StepError` back to the caller without raising.
- Map Google API exceptions onto error kinds by exception type.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

from google.api_core import exceptions as api_exceptions

T = TypeVar("T")


class ErrorKind(enum.StrEnum):
    # Values appear in log lines; treat as stable.
    invalid_identifier = "INVALID_IDENTIFIER"
    client = "CLIENT"
    already_exists = "ALREADY_EXISTS"
    admin = "ADMIN"
    write = "WRITE"
    read = "READ"


@dataclass(frozen=True, slots=True)
class StepError:
    kind: ErrorKind
    step: str
    message: str
    cause: BaseException | None = None


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """
    Outcome of one step: exactly one of `value` / `error` is meaningful.
    Callers branch on `ok` and decide themselves whether a failure is fatal.
    """

    value: T | None = None
    error: StepError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise RuntimeError(f"{self.error.step}: {self.error.message}") from self.error.cause
        return self.value  # type: ignore[return-value]


def success(value: T | None = None) -> Result[T]:
    return Result(value=value)


def failure(
    kind: ErrorKind, step: str, message: str, cause: BaseException | None = None
) -> Result[T]:
    return Result(error=StepError(kind=kind, step=step, message=message, cause=cause))


def classify_admin_error(exc: BaseException) -> ErrorKind:
    # Structured match on the API error class, never on message text.
    if isinstance(exc, api_exceptions.AlreadyExists):
        return ErrorKind.already_exists
    return ErrorKind.admin


# --- Module Notes -----------------------------------------------------------
# Only the entry point turns a failed Result into process termination; every other
# layer returns it so steps can be unit tested in isolation.
