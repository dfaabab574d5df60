"""Shared utilities, shared models and cross-cutting helpers for the backend."""

from travel_backend.shared.enums import Gender, OrderType, UserRole
from travel_backend.shared.errors import (
    INTERNAL_ERROR_MESSAGE,
    AppError,
    ConfigurationError,
    DetailCode,
    DomainValidationError,
    DuplicateEntryError,
    ErrorCode,
    InternalError,
    MappingError,
    NotFoundError,
    UnauthenticatedError,
)
from travel_backend.shared.pagination import Pagination, get_offset, new_pagination
from travel_backend.shared.value_objects import Actor, parse_price

__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "Actor",
    "AppError",
    "ConfigurationError",
    "DetailCode",
    "DomainValidationError",
    "DuplicateEntryError",
    "ErrorCode",
    "Gender",
    "InternalError",
    "MappingError",
    "NotFoundError",
    "OrderType",
    "Pagination",
    "UnauthenticatedError",
    "UserRole",
    "get_offset",
    "new_pagination",
    "parse_price",
]
