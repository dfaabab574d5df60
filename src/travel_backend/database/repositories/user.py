"""Repository and filter for users."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from travel_backend.database.filters import FilterField, FilterModel
from travel_backend.database.repository import Repository
from travel_backend.database.schemas import UserSchema
from travel_backend.shared import UserRole


class UserFilter(FilterModel):
    """Optional predicates accepted when listing users."""

    uid: UUID | None = None
    is_active: bool | None = None
    is_verified: bool | None = None
    role: UserRole | None = None
    search: Annotated[
        str | None, FilterField(search=("full_name", "email", "phone"))
    ] = None


class UserRepository(Repository[UserSchema, UserFilter]):
    """Persistence operations for :class:`UserSchema`."""

    model = UserSchema
