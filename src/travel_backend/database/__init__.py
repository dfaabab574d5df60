"""Database connectivity, repositories and transaction helpers."""

from travel_backend.database.base import AuditedMixin, BaseSchema
from travel_backend.database.dependencies import get_database, get_unit_of_work
from travel_backend.database.errors import ConstraintViolationError
from travel_backend.database.filters import FilterField, FilterModel, parse_filter
from travel_backend.database.repositories import (
    ProductFilter,
    ProductRepository,
    UserFilter,
    UserRepository,
)
from travel_backend.database.repository import Ordering, Repository
from travel_backend.database.schemas import ProductSchema, UserSchema
from travel_backend.database.service import DatabaseService
from travel_backend.database.unit_of_work import TransactionContext, UnitOfWork

__all__ = [
    "AuditedMixin",
    "BaseSchema",
    "ConstraintViolationError",
    "DatabaseService",
    "FilterField",
    "FilterModel",
    "Ordering",
    "ProductFilter",
    "ProductRepository",
    "ProductSchema",
    "Repository",
    "TransactionContext",
    "UnitOfWork",
    "UserFilter",
    "UserRepository",
    "UserSchema",
    "get_database",
    "get_unit_of_work",
    "parse_filter",
]
