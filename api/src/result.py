"""
Typed success/failure result for the result-based error handling path.

A Result carries either a value (success) or an exception (failure). Services
return it for expected outcomes instead of raising; routers turn it into an
HTTP response with ``to_ok`` (see api.src.responses).
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: a value on success, an exception on failure."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Result[T]":
        if error is None:
            raise ValueError("A failed Result requires an exception")
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_faulted(self) -> bool:
        return self.error is not None

    def match(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Exception], R],
    ) -> R:
        """Apply ``on_success`` to the value or ``on_failure`` to the error."""
        if self.is_faulted:
            return on_failure(self.error)
        return on_success(self.value)

    def if_succ(self, action: Callable[[T], None]) -> None:
        if self.is_success:
            action(self.value)

    def if_fail(self, action: Callable[[Exception], None]) -> None:
        if self.is_faulted:
            action(self.error)
