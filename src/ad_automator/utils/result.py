"""Result type for pipeline stages - immutable Success / Failure values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """Failed result containing an error message and the exception behind it."""

    error: str
    details: dict[str, Any] | None = None
    cause: BaseException | None = None

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    @classmethod
    def from_exception(cls, exc: BaseException, **details: Any) -> "Failure":
        """Wrap a raised exception."""
        return cls(str(exc) or type(exc).__name__, details or None, exc)


# Result type - either Success[T] or Failure
Result = Union[Success[T], Failure]
