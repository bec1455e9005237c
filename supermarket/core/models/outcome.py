"""Result objects returned by the service layer.

Expected failures (missing keys, duplicates, dangling references, bad input)
are reported through an ``Outcome`` instead of exceptions so the caller can
print every cause that applies.
"""

from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, ValidationError

ValueT = TypeVar("ValueT")


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    REFERENCE_MISSING = "reference_missing"
    VALIDATION_FAILED = "validation_failed"
    STORE_FAILURE = "store_failure"


class Problem(BaseModel):
    """One attributable reason an operation failed."""

    kind: ErrorKind
    message: str


class Outcome(BaseModel, Generic[ValueT]):
    """Success flag plus value, problems and warnings of a service call."""

    ok: bool
    value: ValueT | None = None
    problems: list[Problem] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def success(cls, value: ValueT | None = None, warnings: list[str] | None = None) -> "Outcome[ValueT]":
        return cls(ok=True, value=value, warnings=warnings or [])

    @classmethod
    def failure(cls, *problems: Problem, warnings: list[str] | None = None) -> "Outcome[ValueT]":
        return cls(ok=False, problems=list(problems), warnings=warnings or [])

    @classmethod
    def invalid(cls, error: ValidationError | str) -> "Outcome[ValueT]":
        """Build a VALIDATION_FAILED outcome from a pydantic error or a message."""
        if isinstance(error, ValidationError):
            problems = [
                Problem(
                    kind=ErrorKind.VALIDATION_FAILED,
                    message=f"{'.'.join(str(part) for part in detail['loc']) or 'value'}: {detail['msg']}",
                )
                for detail in error.errors()
            ]
            return cls(ok=False, problems=problems)
        return cls.failure(Problem(kind=ErrorKind.VALIDATION_FAILED, message=error))

    @property
    def kinds(self) -> set[ErrorKind]:
        return {problem.kind for problem in self.problems}


def problem(kind: ErrorKind, message: str) -> Problem:
    return Problem(kind=kind, message=message)
