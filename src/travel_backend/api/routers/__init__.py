"""Route definitions for public HTTP endpoints."""

from travel_backend.api.routers.health import router as health_router
from travel_backend.api.routers.products import router as products_router
from travel_backend.api.routers.users import router as users_router

__all__ = ["health_router", "products_router", "users_router"]
