"""
Result type for operations that degrade instead of raising.

The distributed cache tier reports every outcome through a ``Result`` so the
cache manager can log and count degraded operations without wrapping each
call site in ``try/except``.

Example:
    result = await client.get("survey:total-count:v1")
    match result:
        case Success(value):
            ...
        case Failure(error):
            logger.warning("cache degraded: %s", error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self):
        """Raise instead of returning a value; check ``is_success()`` first."""
        if isinstance(self.error, Exception):
            raise self.error
        raise RuntimeError(f"Operation failed: {self.error}")


Result = Union[Success[T], Failure[E]]


def success(value: T) -> Success[T]:
    return Success(value)


def failure(error: E) -> Failure[E]:
    return Failure(error)


@dataclass(frozen=True, slots=True)
class CacheError:
    """Distributed cache tier failure (connection, timeout or serialization)."""

    operation: str
    message: str
    key: str | None = None
    original_exception: Exception | None = None

    def __str__(self) -> str:
        if self.key:
            return f"Cache error during {self.operation} ({self.key}): {self.message}"
        return f"Cache error during {self.operation}: {self.message}"


@dataclass(frozen=True, slots=True)
class DatabaseError:
    operation: str
    message: str
    original_exception: Exception | None = None

    def __str__(self) -> str:
        return f"Database error during {self.operation}: {self.message}"


@dataclass(frozen=True, slots=True)
class NotFoundError:
    entity_type: str
    entity_id: str | int

    def __str__(self) -> str:
        return f"{self.entity_type} with id={self.entity_id} not found"


__all__ = [
    "CacheError",
    "DatabaseError",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "failure",
    "success",
]
