"""Application error taxonomy.

Every failure a handler can report is an :class:`AppError` subclass whose
:class:`ErrorKind` fixes the HTTP status; the ``error_code`` narrows it down
for clients (``USERNAME_ALREADY_EXISTS``, ``THEME_IN_USE`` ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional


class ErrorKind(Enum):
    """Closed set of failure kinds with their transport status and code."""

    VALIDATION = (400, "VALIDATION_ERROR")
    AUTHENTICATION = (401, "AUTHENTICATION_REQUIRED")
    AUTHORIZATION = (403, "FORBIDDEN")
    NOT_FOUND = (404, "NOT_FOUND")
    CONFLICT = (409, "CONFLICT")
    INTERNAL = (500, "INTERNAL_SERVER_ERROR")
    UNAVAILABLE = (503, "DB_UNAVAILABLE")

    def __init__(self, status_code: int, default_code: str) -> None:
        self.status_code = status_code
        self.default_code = default_code


class AppError(Exception):
    """Base application error."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.kind.default_code
        self.extra = extra or {}

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "errorCode": self.error_code,
            **self.extra,
        }


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION


class AuthenticationError(AppError):
    kind = ErrorKind.AUTHENTICATION


class AuthorizationError(AppError):
    kind = ErrorKind.AUTHORIZATION


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT


class UnavailableError(AppError):
    kind = ErrorKind.UNAVAILABLE


class InternalError(AppError):
    kind = ErrorKind.INTERNAL


class MalformedRecordError(ValidationError):
    """A draw record line could not be parsed."""

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ) -> None:
        if line_number is not None:
            message = f"Error parsing row {line_number}: {message}"
        extra: Dict[str, Any] = {"line": line_number}
        if expected is not None:
            extra.update(expected=expected, actual=actual)
        super().__init__(message, "MALFORMED_RECORD", extra)
        self.line_number = line_number
        self.expected = expected
        self.actual = actual


__all__ = [
    "ErrorKind",
    "AppError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "UnavailableError",
    "InternalError",
    "MalformedRecordError",
]
