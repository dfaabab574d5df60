"""Business operations on products."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from travel_backend.api.models import (
    ProductCreateRequest,
    ProductListQuery,
    ProductResponse,
    ProductUpdateRequest,
)
from travel_backend.api.services.base import storage_errors
from travel_backend.api.services.listing import count_and_fetch
from travel_backend.database import Ordering, ProductSchema
from travel_backend.shared import (
    DetailCode,
    DomainValidationError,
    ErrorCode,
    NotFoundError,
    OrderType,
    Pagination,
    new_pagination,
    parse_price,
)

if TYPE_CHECKING:
    from travel_backend.api.services.mapper import Mapper
    from travel_backend.database import UnitOfWork
    from travel_backend.shared import Actor

logger = logging.getLogger(__name__)

UNIQUE_RULES = {
    "products_name_unique": (
        ErrorCode.PRODUCT_NAME_EXISTS,
        "product name already exists",
    ),
    "ux_products_uid_active": (
        ErrorCode.DUPLICATE_ENTRY,
        "product UID already exists",
    ),
}


def _price(raw: str) -> Decimal:
    try:
        return parse_price(raw)
    except ValueError as exc:
        raise DomainValidationError(
            str(exc), details={"price": DetailCode.INVALID_FORMAT}
        ) from exc


class ProductService:
    """Create, list, read, update and soft-delete products."""

    def __init__(self, uow: UnitOfWork, mapper: Mapper) -> None:
        self._uow = uow
        self._mapper = mapper

    def create_product(
        self, payload: ProductCreateRequest, actor: Actor
    ) -> ProductResponse:
        product = ProductSchema()
        self._mapper.to_model(payload, product, exclude={"price"})
        product.price = _price(payload.price)
        product.created_by = actor.as_audit()

        with storage_errors(UNIQUE_RULES):
            created = self._uow.products.save(product)
        logger.info("Product %s created by actor %s", created.id, actor.id)
        return self._mapper.to_response(created, ProductResponse)

    def list_products(
        self, query: ProductListQuery
    ) -> tuple[list[ProductResponse], Pagination | None]:
        """Return one page of live products and the pagination block."""
        repository = self._uow.products
        filter_ = query.to_filter()
        ordering = Ordering(
            column=query.order_by, descending=query.order_type is OrderType.DESC
        )
        with storage_errors(UNIQUE_RULES):
            total, products = count_and_fetch(
                lambda: repository.count(filter_),
                lambda: repository.find_all(query.page, query.size, filter_, ordering),
                concurrent=not self._uow.in_transaction,
            )
        pagination = new_pagination(query.page, query.size, total)
        return self._mapper.to_responses(products, ProductResponse), pagination

    def get_product(self, product_id: int) -> ProductResponse:
        with storage_errors(UNIQUE_RULES):
            product = self._find(self._uow, product_id)
        return self._mapper.to_response(product, ProductResponse)

    def update_product(
        self, product_id: int, payload: ProductUpdateRequest, actor: Actor
    ) -> ProductResponse:
        """Apply the non-empty fields of *payload* to a live product."""
        price = _price(payload.price) if payload.price else None

        def apply(uow: UnitOfWork) -> ProductSchema:
            product = self._find(uow, product_id)
            self._mapper.to_model(payload, product, exclude={"price"})
            if price is not None:
                product.price = price
            product.modified_on = datetime.now(UTC)
            product.modified_by = actor.as_audit()
            return uow.products.update(product)

        with storage_errors(UNIQUE_RULES):
            updated = self._uow.execute(apply)
        return self._mapper.to_response(updated, ProductResponse)

    def delete_product(self, product_id: int, actor: Actor) -> None:
        def remove(uow: UnitOfWork) -> None:
            self._find(uow, product_id)
            uow.products.delete(product_id)

        with storage_errors(UNIQUE_RULES):
            self._uow.execute(remove)
        logger.info("Product %s deleted by actor %s", product_id, actor.id)

    @staticmethod
    def _find(uow: UnitOfWork, product_id: int) -> ProductSchema:
        try:
            return uow.products.find_by_id(product_id)
        except NotFoundError as exc:
            raise NotFoundError(
                "product not found", code=ErrorCode.PRODUCT_NOT_FOUND
            ) from exc


__all__ = ["ProductService"]
