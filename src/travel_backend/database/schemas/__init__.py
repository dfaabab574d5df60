"""SQLAlchemy schemas for persisted entities."""

from travel_backend.database.schemas.product import ProductSchema
from travel_backend.database.schemas.user import UserSchema

__all__ = ["ProductSchema", "UserSchema"]
