"""Entity repositories built on the generic :class:`Repository`."""

from travel_backend.database.repositories.product import (
    ProductFilter,
    ProductRepository,
)
from travel_backend.database.repositories.user import UserFilter, UserRepository

__all__ = ["ProductFilter", "ProductRepository", "UserFilter", "UserRepository"]
