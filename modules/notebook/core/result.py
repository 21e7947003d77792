"""
Operation Results.

Every public service operation returns a Result instead of raising:

    Ok(value)                       - success payload
    Err(kind, message, code, ...)   - expected or internal failure

Callers branch on `result.is_ok`. Expected failures (validation, not found,
missing identity) and internal failures are all reported as data.

Usage:
    result = await service.search_by_text(owner_id, "python")
    if not result.is_ok:
        return render_error(result.message)
    for note in result.value.notes:
        ...
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from modules.notebook.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure taxonomy reported across the service boundary."""

    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


_KIND_BY_EXCEPTION: dict[type[ApplicationError], ErrorKind] = {
    AuthenticationError: ErrorKind.UNAUTHORIZED,
    ValidationError: ErrorKind.VALIDATION,
    NotFoundError: ErrorKind.NOT_FOUND,
}

_EXCEPTION_BY_CODE: dict[str, type[ApplicationError]] = {
    "AUTH_UNAUTHORIZED": AuthenticationError,
    "VAL_VALIDATION_ERROR": ValidationError,
    "RES_NOT_FOUND": NotFoundError,
    "RES_CONFLICT": ConflictError,
    "SYS_EXTERNAL_SERVICE_ERROR": ExternalServiceError,
    "SYS_DATABASE_ERROR": DatabaseError,
}

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful operation result."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed operation result."""

    kind: ErrorKind
    message: str
    code: str = "SYS_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, exc: ApplicationError) -> "Err":
        """Build an Err from an application exception."""
        kind = ErrorKind.INTERNAL
        for exc_type, mapped in _KIND_BY_EXCEPTION.items():
            if isinstance(exc, exc_type):
                kind = mapped
                break
        return cls(
            kind=kind,
            message=exc.message,
            code=exc.code,
            details=dict(getattr(exc, "details", {}) or {}),
        )

    @classmethod
    def internal(cls, message: str = INTERNAL_ERROR_MESSAGE) -> "Err":
        """Generic failure for unexpected errors."""
        return cls(kind=ErrorKind.INTERNAL, message=message)

    def to_exception(self) -> ApplicationError:
        """Rebuild the matching application exception."""
        exc_type = _EXCEPTION_BY_CODE.get(self.code)
        if exc_type is ValidationError:
            return ValidationError(self.message, details=self.details or None)
        if exc_type is not None:
            return exc_type(self.message)
        return ApplicationError(self.message, code=self.code)


Result = Union[Ok[T], Err]
