"""Typed outcome of a service call, returned instead of raising.

The presentation layer decides how to surface a failure (HTTP status, toast,
banner); services only describe what happened.
"""

from __future__ import annotations

import enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    NETWORK = "network"
    BUSY = "busy"


class OperationResult(Generic[T]):
    def __init__(
        self,
        ok: bool,
        data: T | None = None,
        message: str = "",
        error_kind: ErrorKind | None = None,
        field_errors: dict[str, str] | None = None,
    ):
        self.ok = ok
        self.data = data
        self.message = message
        self.error_kind = error_kind
        self.field_errors = field_errors or {}

    @classmethod
    def success(cls, data: Any = None, message: str = "") -> OperationResult:
        return cls(ok=True, data=data, message=message)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        *,
        data: Any = None,
        field_errors: dict[str, str] | None = None,
    ) -> OperationResult:
        # data carries the degraded default a view may still render
        return cls(ok=False, data=data, message=message, error_kind=kind, field_errors=field_errors)

    def __repr__(self) -> str:
        if self.ok:
            return f"<OperationResult ok message={self.message!r}>"
        return f"<OperationResult failed kind={self.error_kind} message={self.message!r}>"
