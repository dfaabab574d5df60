"""User database schema."""

from enum import StrEnum

from sqlalchemy import Boolean, Enum, Index, String, false, text, true
from sqlalchemy.orm import Mapped, mapped_column

from travel_backend.database.base import AuditedMixin, BaseSchema
from travel_backend.shared import Gender, UserRole


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


class UserSchema(AuditedMixin, BaseSchema):
    """SQLAlchemy model for application users."""

    __tablename__ = "users"
    __table_args__ = (
        Index(
            "ux_users_email_active",
            "email",
            unique=True,
            postgresql_where=text("deleted_on IS NULL"),
            sqlite_where=text("deleted_on IS NULL"),
        ),
        Index(
            "ux_users_phone_active",
            "phone",
            unique=True,
            postgresql_where=text("deleted_on IS NULL"),
            sqlite_where=text("deleted_on IS NULL"),
        ),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[Gender] = mapped_column(
        Enum(Gender, name="customer_gender_enum", values_callable=_enum_values),
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(String(320))
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="users_role_enum", values_callable=_enum_values),
        nullable=False,
    )
