"""Shared enumerations used across the backend."""

from enum import StrEnum


class Gender(StrEnum):
    """Genders accepted for user profiles."""

    MALE = "male"
    FEMALE = "female"


class UserRole(StrEnum):
    """Roles a user account can hold."""

    CUSTOMER = "customer"
    MUTHAWIF = "muthawif"


class OrderType(StrEnum):
    """Sort direction for list endpoints."""

    ASC = "asc"
    DESC = "desc"
