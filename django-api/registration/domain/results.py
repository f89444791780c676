"""Explicit success/failure outcome of a mutating service call."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from registration.domain.errors import DomainError, ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a domain error, never both.

    A Result is truthy exactly when it succeeded, so callers that only care
    about success can write ``if catalog.increment_attendance(1): ...``.
    """

    value: T | None = None
    error: DomainError | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> ErrorCode | None:
        return self.error.code if self.error is not None else None

    def __bool__(self) -> bool:
        return self.ok
