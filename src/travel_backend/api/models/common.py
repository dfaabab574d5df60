"""Response envelope and shared request models."""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from travel_backend.shared import OrderType, Pagination

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DELETED_MESSAGE = "success delete data"

DataT = TypeVar("DataT")


class ErrorBody(BaseModel):
    """Error block of the response envelope."""

    code: str
    message: str
    details: Any | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every response body."""

    status: Literal["success", "error"]
    data: DataT | None = None
    error: ErrorBody | None = None
    pagination: Pagination | None = None


def success(
    data: DataT, pagination: Pagination | None = None
) -> ApiResponse[DataT]:
    """Wrap *data* in a success envelope."""
    return ApiResponse(status="success", data=data, pagination=pagination)


def failure(code: str, message: str, details: Any | None = None) -> ApiResponse[None]:
    """Build an error envelope."""
    return ApiResponse(
        status="error", error=ErrorBody(code=code, message=message, details=details)
    )


class ListQuery(BaseModel):
    """Pagination and sorting parameters shared by list endpoints."""

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    order_type: OrderType = OrderType.DESC
