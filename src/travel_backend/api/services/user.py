"""Business operations on users."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from travel_backend.api.models import (
    UserCreateRequest,
    UserListQuery,
    UserResponse,
    UserUpdateRequest,
)
from travel_backend.api.services.base import storage_errors
from travel_backend.api.services.listing import count_and_fetch
from travel_backend.database import Ordering, UserSchema
from travel_backend.shared import (
    ErrorCode,
    NotFoundError,
    OrderType,
    Pagination,
    new_pagination,
)

if TYPE_CHECKING:
    from travel_backend.api.services.auth import AuthService
    from travel_backend.api.services.mapper import Mapper
    from travel_backend.database import UnitOfWork
    from travel_backend.shared import Actor

logger = logging.getLogger(__name__)

UNIQUE_RULES = {
    "ux_users_email_active": (ErrorCode.EMAIL_EXISTS, "email already registered"),
    "ux_users_phone_active": (ErrorCode.PHONE_EXISTS, "phone already registered"),
}


class UserService:
    """Create, list, read, update and soft-delete users."""

    def __init__(
        self, uow: UnitOfWork, mapper: Mapper, auth_service: AuthService
    ) -> None:
        self._uow = uow
        self._mapper = mapper
        self._auth_service = auth_service

    def create_user(self, payload: UserCreateRequest, actor: Actor) -> UserResponse:
        """Register a user; the plain password is replaced by its hash."""
        user = UserSchema()
        self._mapper.to_model(payload, user, exclude={"password"})
        user.password_hash = self._auth_service.hash_password(payload.password)
        user.created_by = actor.as_audit()

        with storage_errors(UNIQUE_RULES):
            created = self._uow.users.save(user)
        logger.info("User %s created by actor %s", created.id, actor.id)
        return self._mapper.to_response(created, UserResponse)

    def list_users(
        self, query: UserListQuery
    ) -> tuple[list[UserResponse], Pagination | None]:
        repository = self._uow.users
        filter_ = query.to_filter()
        ordering = Ordering(
            column=query.order_by, descending=query.order_type is OrderType.DESC
        )
        with storage_errors(UNIQUE_RULES):
            total, users = count_and_fetch(
                lambda: repository.count(filter_),
                lambda: repository.find_all(query.page, query.size, filter_, ordering),
                concurrent=not self._uow.in_transaction,
            )
        pagination = new_pagination(query.page, query.size, total)
        return self._mapper.to_responses(users, UserResponse), pagination

    def get_user(self, user_id: int) -> UserResponse:
        with storage_errors(UNIQUE_RULES):
            user = self._find(self._uow, user_id)
        return self._mapper.to_response(user, UserResponse)

    def update_user(
        self, user_id: int, payload: UserUpdateRequest, actor: Actor
    ) -> UserResponse:
        def apply(uow: UnitOfWork) -> UserSchema:
            user = self._find(uow, user_id)
            self._mapper.to_model(payload, user)
            user.modified_on = datetime.now(UTC)
            user.modified_by = actor.as_audit()
            return uow.users.update(user)

        with storage_errors(UNIQUE_RULES):
            updated = self._uow.execute(apply)
        return self._mapper.to_response(updated, UserResponse)

    def delete_user(self, user_id: int, actor: Actor) -> None:
        def remove(uow: UnitOfWork) -> None:
            self._find(uow, user_id)
            uow.users.delete(user_id)

        with storage_errors(UNIQUE_RULES):
            self._uow.execute(remove)
        logger.info("User %s deleted by actor %s", user_id, actor.id)

    @staticmethod
    def _find(uow: UnitOfWork, user_id: int) -> UserSchema:
        try:
            return uow.users.find_by_id(user_id)
        except NotFoundError as exc:
            raise NotFoundError("user not found", code=ErrorCode.USER_NOT_FOUND) from exc


__all__ = ["UserService"]
