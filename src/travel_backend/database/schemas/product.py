"""Product database schema."""

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Index,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from travel_backend.database.base import AuditedMixin, BaseSchema


class ProductSchema(AuditedMixin, BaseSchema):
    """SQLAlchemy model for sellable products."""

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("name", name="products_name_unique"),
        Index(
            "ux_products_uid_active",
            "uid",
            unique=True,
            postgresql_where=text("deleted_on IS NULL"),
            sqlite_where=text("deleted_on IS NULL"),
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=Decimal("0")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
