"""Product endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from travel_backend.api.dependencies import get_current_actor, get_product_service
from travel_backend.api.models import (
    DELETED_MESSAGE,
    ApiResponse,
    ProductCreateRequest,
    ProductListQuery,
    ProductResponse,
    ProductUpdateRequest,
    success,
)
from travel_backend.api.services import ProductService
from travel_backend.shared import Actor

router = APIRouter(prefix="/products", tags=["products"])


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreateRequest,
    actor: Actor = Depends(get_current_actor),
    service: ProductService = Depends(get_product_service),
) -> ApiResponse[ProductResponse]:
    """Create a product."""

    return success(service.create_product(payload, actor))


@router.get(
    "",
    response_model=ApiResponse[list[ProductResponse]],
    response_model_exclude_none=True,
)
def list_products(
    query: Annotated[ProductListQuery, Query()],
    service: ProductService = Depends(get_product_service),
) -> ApiResponse[list[ProductResponse]]:
    """List live products, filtered, sorted and paginated."""

    products, pagination = service.list_products(query)
    return success(products, pagination)


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    response_model_exclude_none=True,
)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> ApiResponse[ProductResponse]:
    return success(service.get_product(product_id))


@router.patch(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    response_model_exclude_none=True,
)
def update_product(
    product_id: int,
    payload: ProductUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    service: ProductService = Depends(get_product_service),
) -> ApiResponse[ProductResponse]:
    """Update the fields present in the payload."""

    return success(service.update_product(product_id, payload, actor))


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[str],
    response_model_exclude_none=True,
)
def delete_product(
    product_id: int,
    actor: Actor = Depends(get_current_actor),
    service: ProductService = Depends(get_product_service),
) -> ApiResponse[str]:
    """Soft-delete a product."""

    service.delete_product(product_id, actor)
    return success(DELETED_MESSAGE)
