"""Pydantic models for user endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from travel_backend.api.models.common import ListQuery
from travel_backend.database.repositories import UserFilter
from travel_backend.shared import Gender, UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\+?[0-9][0-9 \-]{5,48}$"
PASSWORD_MIN_LENGTH = 8


class UserCreateRequest(BaseModel):
    """Payload for registering a user."""

    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    full_name: str = Field(min_length=1, max_length=255)
    gender: Gender
    email: str = Field(max_length=320, pattern=EMAIL_PATTERN)
    phone: str = Field(max_length=50, pattern=PHONE_PATTERN)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)
    role: UserRole

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserUpdateRequest(BaseModel):
    """Partial update payload; omitted fields keep their stored value."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    gender: Gender | None = None
    phone: str | None = Field(default=None, max_length=50, pattern=PHONE_PATTERN)


class UserResponse(BaseModel):
    """Public representation of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    uid: UUID
    first_name: str
    middle_name: str | None = None
    last_name: str | None = None
    full_name: str
    gender: Gender
    email: str | None = None
    phone: str
    is_active: bool
    is_verified: bool
    role: UserRole
    created_on: datetime
    modified_on: datetime | None = None


class UserListQuery(ListQuery, UserFilter):
    """Query string accepted by ``GET /users``."""

    order_by: Literal["id", "full_name", "email", "created_on"] = "id"

    def to_filter(self) -> UserFilter:
        """Return only the filtering part of the query."""
        return UserFilter.model_validate(
            self.model_dump(include=set(UserFilter.model_fields))
        )
