"""Offset pagination helpers."""

from __future__ import annotations

import math

from pydantic import BaseModel


class Pagination(BaseModel):
    """Pagination block attached to list responses."""

    total_items: int
    total_pages: int
    current_page: int
    page_size: int


def get_offset(page: int, size: int) -> int:
    """Return the row offset for a 1-based *page* of *size* rows."""
    if page > 1:
        return (page - 1) * size
    return 0


def new_pagination(
    page: int | None, size: int | None, count: int | None
) -> Pagination | None:
    """Build the pagination block, or ``None`` when it cannot be computed."""
    if page is None or size is None or count is None:
        return None
    if size <= 0 or count <= 0:
        return None
    return Pagination(
        total_items=count,
        total_pages=math.ceil(count / size),
        current_page=page,
        page_size=size,
    )


__all__ = ["Pagination", "get_offset", "new_pagination"]
