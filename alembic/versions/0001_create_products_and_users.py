"""Create products and users tables."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_create_products_and_users"
down_revision = None
branch_labels = None
depends_on = None

GENDER = sa.Enum("male", "female", name="customer_gender_enum")
ROLE = sa.Enum("customer", "muthawif", name="users_role_enum")

AUDIT_JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")
LIVE_ROWS = sa.text("deleted_on IS NULL")


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("uid", sa.Uuid(), nullable=False),
        sa.Column(
            "created_on",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("created_by", AUDIT_JSON, nullable=False),
        sa.Column("modified_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("modified_by", AUDIT_JSON, nullable=True),
        sa.Column("deleted_on", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "products",
        *_audit_columns(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "price",
            sa.Numeric(precision=18, scale=2),
            server_default="0",
            nullable=False,
        ),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.true(), nullable=False
        ),
        sa.UniqueConstraint("name", name="products_name_unique"),
    )
    op.create_index("ix_products_deleted_on", "products", ["deleted_on"])
    op.create_index(
        "ux_products_uid_active",
        "products",
        ["uid"],
        unique=True,
        postgresql_where=LIVE_ROWS,
        sqlite_where=LIVE_ROWS,
    )

    op.create_table(
        "users",
        *_audit_columns(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("gender", GENDER, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.true(), nullable=False
        ),
        sa.Column(
            "is_verified", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("role", ROLE, nullable=False),
    )
    op.create_index("ix_users_deleted_on", "users", ["deleted_on"])
    for name, column in (
        ("ux_users_email_active", "email"),
        ("ux_users_phone_active", "phone"),
    ):
        op.create_index(
            name,
            "users",
            [column],
            unique=True,
            postgresql_where=LIVE_ROWS,
            sqlite_where=LIVE_ROWS,
        )


def downgrade() -> None:
    op.drop_index("ux_users_phone_active", table_name="users")
    op.drop_index("ux_users_email_active", table_name="users")
    op.drop_index("ix_users_deleted_on", table_name="users")
    op.drop_table("users")
    op.drop_index("ux_products_uid_active", table_name="products")
    op.drop_index("ix_products_deleted_on", table_name="products")
    op.drop_table("products")

    bind = op.get_bind()
    ROLE.drop(bind, checkfirst=True)
    GENDER.drop(bind, checkfirst=True)
