"""Pydantic models for product endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from travel_backend.api.models.common import ListQuery
from travel_backend.database.repositories import ProductFilter
from travel_backend.shared import parse_price

NAME_MAX_LENGTH = 255


def _check_price(value: str | None) -> str | None:
    if value is None:
        return value
    parse_price(value)
    return value.strip()


class ProductCreateRequest(BaseModel):
    """Payload for creating a product."""

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = None
    price: str = Field(examples=["150000.00"])
    is_active: bool | None = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, value: str) -> str:
        return _check_price(value)


class ProductUpdateRequest(BaseModel):
    """Partial update payload; omitted fields keep their stored value."""

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = None
    price: str | None = None
    is_active: bool | None = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, value: str | None) -> str | None:
        return _check_price(value)


class ProductResponse(BaseModel):
    """Public representation of a product."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    uid: UUID
    name: str
    description: str | None = None
    price: Decimal
    is_active: bool
    created_on: datetime
    modified_on: datetime | None = None


class ProductListQuery(ListQuery, ProductFilter):
    """Query string accepted by ``GET /products``."""

    order_by: Literal["id", "name", "price", "created_on"] = "id"

    def to_filter(self) -> ProductFilter:
        """Return only the filtering part of the query."""
        return ProductFilter.model_validate(
            self.model_dump(include=set(ProductFilter.model_fields))
        )
