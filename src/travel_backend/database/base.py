"""Declarative base and shared columns for SQLAlchemy models."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, BigInteger, DateTime, Integer, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

AuditJSON = JSON().with_variant(JSONB(), "postgresql")
Identifier = BigInteger().with_variant(Integer(), "sqlite")


class BaseSchema(DeclarativeBase):
    """Base class for all SQLAlchemy schemas."""

    pass


class AuditedMixin:
    """Identity, audit and soft-delete columns shared by every entity table."""

    id: Mapped[int] = mapped_column(Identifier, primary_key=True, autoincrement=True)
    uid: Mapped[UUID] = mapped_column(Uuid, default=uuid4, nullable=False)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    created_by: Mapped[dict[str, Any]] = mapped_column(AuditJSON, nullable=False)
    modified_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    modified_by: Mapped[dict[str, Any] | None] = mapped_column(AuditJSON)
    deleted_on: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), index=True
    )
