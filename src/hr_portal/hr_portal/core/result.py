from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from .constants import MSG_NOT_FOUND, MSG_OPERATION_FAILED, MSG_STORE_UNAVAILABLE
from .exceptions import ConflictError, NotFoundError, StoreUnavailableError, ValidationError

T = TypeVar("T")
U = TypeVar("U")


class ErrorCode(str, Enum):
    """Failure categories carried by a failed Result."""

    STORE_UNAVAILABLE = "store_unavailable"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    OPERATION_FAILED = "operation_failed"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Tagged outcome of a data operation: ``{success, data}`` or ``{success: False, error}``.

    Callers branch on ``success`` instead of catching exceptions.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: ErrorCode = ErrorCode.OPERATION_FAILED) -> "Result[T]":
        return cls(success=False, error=error, code=code)

    @classmethod
    def from_exception(cls, exc: Exception) -> "Result[T]":
        if isinstance(exc, StoreUnavailableError):
            return cls.fail(str(exc) or MSG_STORE_UNAVAILABLE, ErrorCode.STORE_UNAVAILABLE)
        if isinstance(exc, NotFoundError):
            return cls.fail(str(exc) or MSG_NOT_FOUND, ErrorCode.NOT_FOUND)
        if isinstance(exc, ValidationError):
            return cls.fail(str(exc), ErrorCode.VALIDATION)
        if isinstance(exc, ConflictError):
            return cls.fail(str(exc), ErrorCode.CONFLICT)
        return cls.fail(f"{MSG_OPERATION_FAILED}: {exc}", ErrorCode.OPERATION_FAILED)

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Transform the payload of a successful result; failures pass through."""
        if not self.success:
            return Result(success=False, error=self.error, code=self.code)
        return Result.ok(fn(self.data))  # type: ignore[arg-type]

    def to_dict(self, serialize: Optional[Callable[[Any], Any]] = None) -> dict:
        if self.success:
            out: dict[str, Any] = {"success": True}
            if self.data is not None:
                out["data"] = serialize(self.data) if serialize else self.data
            return out
        return {"success": False, "error": self.error, "code": self.code.value if self.code else None}
