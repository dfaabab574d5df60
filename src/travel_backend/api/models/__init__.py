"""Models used for API request and response payloads."""

from travel_backend.api.models.common import (
    DELETED_MESSAGE,
    ApiResponse,
    ErrorBody,
    ListQuery,
    failure,
    success,
)
from travel_backend.api.models.product import (
    ProductCreateRequest,
    ProductListQuery,
    ProductResponse,
    ProductUpdateRequest,
)
from travel_backend.api.models.user import (
    UserCreateRequest,
    UserListQuery,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "DELETED_MESSAGE",
    "ApiResponse",
    "ErrorBody",
    "ListQuery",
    "ProductCreateRequest",
    "ProductListQuery",
    "ProductResponse",
    "ProductUpdateRequest",
    "UserCreateRequest",
    "UserListQuery",
    "UserResponse",
    "UserUpdateRequest",
    "failure",
    "success",
]
