"""User endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from travel_backend.api.dependencies import get_current_actor, get_user_service
from travel_backend.api.models import (
    DELETED_MESSAGE,
    ApiResponse,
    UserCreateRequest,
    UserListQuery,
    UserResponse,
    UserUpdateRequest,
    success,
)
from travel_backend.api.services import UserService
from travel_backend.shared import Actor

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: UserCreateRequest,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    """Register a user."""

    return success(service.create_user(payload, actor))


@router.get(
    "",
    response_model=ApiResponse[list[UserResponse]],
    response_model_exclude_none=True,
)
def list_users(
    query: Annotated[UserListQuery, Query()],
    service: UserService = Depends(get_user_service),
) -> ApiResponse[list[UserResponse]]:
    """List live users, filtered, sorted and paginated."""

    users, pagination = service.list_users(query)
    return success(users, pagination)


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
)
def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    return success(service.get_user(user_id))


@router.patch(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
)
def update_user(
    user_id: int,
    payload: UserUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    """Update the profile fields present in the payload."""

    return success(service.update_user(user_id, payload, actor))


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[str],
    response_model_exclude_none=True,
)
def delete_user(
    user_id: int,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[str]:
    """Soft-delete a user."""

    service.delete_user(user_id, actor)
    return success(DELETED_MESSAGE)
