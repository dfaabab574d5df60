"""Application error taxonomy shared by every layer."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable, machine-readable codes returned to API clients."""

    UNKNOWN = "ERR_UNKNOWN"
    INTERNAL = "ERR_INTERNAL"
    BAD_REQUEST = "ERR_BAD_REQUEST"
    VALIDATION = "ERR_VALIDATION"
    UNAUTHENTICATED = "ERR_UNAUTHENTICATED"
    TOKEN_EXPIRED = "ERR_TOKEN_EXPIRED"
    UNAUTHORIZED = "ERR_UNAUTHORIZED"
    NOT_FOUND = "ERR_NOT_FOUND"
    DUPLICATE_ENTRY = "ERR_DUPLICATE_ENTRY"
    STATE_CONFLICT = "ERR_STATE_CONFLICT"
    RATE_LIMIT_EXCEEDED = "ERR_RATE_LIMIT_EXCEEDED"
    SERVICE_UNAVAILABLE = "ERR_SERVICE_UNAVAILABLE"

    USER_NOT_FOUND = "ERR_USER_NOT_FOUND"
    EMAIL_EXISTS = "ERR_EMAIL_EXISTS"
    PHONE_EXISTS = "ERR_PHONE_EXISTS"

    PRODUCT_NOT_FOUND = "ERR_PRODUCT_NOT_FOUND"
    PRODUCT_NAME_EXISTS = "ERR_PRODUCT_NAME_EXISTS"


class DetailCode(StrEnum):
    """Field-level codes placed in the ``details`` of validation errors."""

    INVALID_VALUE = "INVALID_VALUE"
    IS_REQUIRED = "IS_REQUIRED"
    INVALID_TYPE = "INVALID_TYPE"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_LENGTH = "INVALID_LENGTH"
    LENGTH_TOO_SHORT = "LENGTH_TOO_SHORT"
    LENGTH_TOO_LONG = "LENGTH_TOO_LONG"
    VALUE_TOO_LOW = "VALUE_TOO_LOW"
    VALUE_TOO_HIGH = "VALUE_TOO_HIGH"
    INVALID_CHOICE = "INVALID_CHOICE"


INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class AppError(Exception):
    """Base class for errors that carry a client-facing code.

    ``message`` is meant for humans and logs, ``details`` holds structured data
    such as offending fields. The wrapped cause is kept on ``__cause__`` when
    raised with ``raise ... from``.
    """

    default_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.__cause__ is not None:
            return f"[{self.code}] {self.message}: {self.__cause__}"
        return f"[{self.code}] {self.message}"


class NotFoundError(AppError):
    """Raised when a requested record does not exist."""

    default_code = ErrorCode.NOT_FOUND


class DomainValidationError(AppError):
    """Raised when input passes decoding but breaks a business rule."""

    default_code = ErrorCode.VALIDATION


class DuplicateEntryError(AppError):
    """Raised when a write would break a uniqueness rule."""

    default_code = ErrorCode.DUPLICATE_ENTRY


class UnauthenticatedError(AppError):
    """Raised when the caller identity cannot be established."""

    default_code = ErrorCode.UNAUTHENTICATED


class InternalError(AppError):
    """Wraps unexpected failures so their text never reaches clients."""

    default_code = ErrorCode.INTERNAL


class ConfigurationError(InternalError):
    """Raised when a component is wired with unusable arguments."""


class MappingError(InternalError):
    """Raised when data cannot be copied between two shapes."""

    def __init__(self, message: str = "failed to map data", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "AppError",
    "ConfigurationError",
    "DetailCode",
    "DomainValidationError",
    "DuplicateEntryError",
    "ErrorCode",
    "InternalError",
    "MappingError",
    "NotFoundError",
    "UnauthenticatedError",
]
