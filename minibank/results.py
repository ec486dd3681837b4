"""
Operation Results

Tagged success-or-error outcome returned by every fallible account and
registration operation.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import BankingError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a fallible operation

    Exactly one of ``value``/``error`` is meaningful: ``error`` is None on
    success. ``bool(result)`` is True only on success.
    """
    value: Optional[T] = None
    error: Optional[BankingError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value, error=None)

    @classmethod
    def failure(cls, error: BankingError) -> "Result[T]":
        if error is None:
            raise ValueError("A failed result requires an error")
        return cls(value=None, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the value, or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.value

    def is_error(self, error_type: type) -> bool:
        """Check whether this result failed with the given error type"""
        return isinstance(self.error, error_type)
