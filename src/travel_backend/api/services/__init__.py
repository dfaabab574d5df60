"""Service layer for API-specific business logic."""

from travel_backend.api.services.auth import AuthService
from travel_backend.api.services.listing import count_and_fetch
from travel_backend.api.services.mapper import Mapper
from travel_backend.api.services.product import ProductService
from travel_backend.api.services.user import UserService

__all__ = [
    "AuthService",
    "Mapper",
    "ProductService",
    "UserService",
    "count_and_fetch",
]
