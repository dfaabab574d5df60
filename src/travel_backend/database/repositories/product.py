"""Repository and filter for products."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Any

from travel_backend.database.filters import FilterField, FilterModel
from travel_backend.database.repository import Repository
from travel_backend.database.schemas import ProductSchema

if TYPE_CHECKING:
    from sqlalchemy import Select


class ProductFilter(FilterModel):
    """Optional predicates accepted when listing products."""

    is_active: bool | None = None
    search: Annotated[str | None, FilterField(search=("name", "description"))] = None
    min_price: Annotated[Decimal | None, FilterField(ignore=True)] = None
    max_price: Annotated[Decimal | None, FilterField(ignore=True)] = None


class ProductRepository(Repository[ProductSchema, ProductFilter]):
    """Persistence operations for :class:`ProductSchema`."""

    model = ProductSchema

    def apply_filter(
        self, statement: Select[Any], filter_: ProductFilter | None
    ) -> Select[Any]:
        statement = super().apply_filter(statement, filter_)
        if filter_ is None:
            return statement
        # price bounds are inclusive
        if filter_.min_price is not None:
            statement = statement.where(ProductSchema.price >= filter_.min_price)
        if filter_.max_price is not None:
            statement = statement.where(ProductSchema.price <= filter_.max_price)
        return statement
