"""
Result type returned by every service method.

A Result is either a success carrying an optional value, or a failure
carrying one or more AppError values. Services never raise for expected
outcomes; routers translate a Result via common.api.responses.
"""
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from finance_manager.common.errors import AppError

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    value: Optional[T] = None
    errors: List[AppError] = field(default_factory=list)

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, *errors: AppError) -> "Result[T]":
        if not errors:
            raise ValueError("Result.fail() requires at least one error")
        return cls(errors=list(errors))

    @property
    def is_success(self) -> bool:
        return not self.errors

    @property
    def is_failed(self) -> bool:
        return bool(self.errors)

    @property
    def error(self) -> Optional[AppError]:
        """First error, or None on success."""
        return self.errors[0] if self.errors else None
