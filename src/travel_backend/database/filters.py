"""Translate filter models into SQLAlchemy WHERE clauses.

A filter is a :class:`FilterModel` whose fields are all optional. Each field that is
not ``None`` becomes one predicate. Fields can be annotated with
:class:`FilterField` to change how they are applied::

    class ProductFilter(FilterModel):
        is_active: bool | None = None
        search: Annotated[str | None, FilterField(search=("name", "description"))] = None
        min_price: Annotated[Decimal | None, FilterField(ignore=True)] = None

``search`` fields expand to ``name ILIKE '%term%' OR description ILIKE '%term%'``.
Ignored fields are left to the repository that owns the filter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from sqlalchemy import or_

from travel_backend.shared import ConfigurationError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

    from travel_backend.database.base import BaseSchema

SEARCH_COLUMN = "search"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


@dataclass(frozen=True, slots=True)
class FilterField:
    """Per-field instructions for :func:`parse_filter`."""

    column: str | None = None
    search: tuple[str, ...] = ()
    ignore: bool = False


def to_snake_case(name: str) -> str:
    """Convert ``CamelCase`` or ``camelCase`` identifiers to ``snake_case``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _field_options(metadata: list[Any]) -> FilterField:
    for item in metadata:
        if isinstance(item, FilterField):
            return item
    return FilterField()


def _resolve_column(model: type[BaseSchema], name: str) -> ColumnElement[Any]:
    try:
        return model.__table__.c[name]
    except KeyError as exc:
        msg = f"{model.__name__} has no column '{name}'"
        raise ConfigurationError(msg) from exc


class FilterModel(BaseModel):
    """Base class for filters; each instance builds its own predicates.

    The default :meth:`predicates` follows the field declarations. Filter
    types with predicates that cannot be expressed as equality or search
    override it.
    """

    def predicates(self, model: type[BaseSchema]) -> list[ColumnElement[bool]]:
        """Return one predicate per non-null, non-ignored field."""
        clauses: list[ColumnElement[bool]] = []
        for name, field_info in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue

            options = _field_options(field_info.metadata)
            if options.ignore:
                continue

            column_name = options.column or to_snake_case(name)
            if options.search or column_name == SEARCH_COLUMN:
                if not isinstance(value, str) or not value or not options.search:
                    continue
                pattern = f"%{value}%"
                clauses.append(
                    or_(
                        *(
                            _resolve_column(model, column).ilike(pattern)
                            for column in options.search
                        )
                    )
                )
                continue

            clauses.append(_resolve_column(model, column_name) == value)
        return clauses


def parse_filter(
    statement: Select[Any],
    model: type[BaseSchema],
    filter_: FilterModel | None,
) -> Select[Any]:
    """Return *statement* restricted by every predicate of *filter_*."""
    if filter_ is None:
        return statement
    if not isinstance(filter_, FilterModel):
        msg = f"filter must be a FilterModel, got {type(filter_).__name__}"
        raise ConfigurationError(msg)
    clauses = filter_.predicates(model)
    if not clauses:
        return statement
    return statement.where(*clauses)


__all__ = [
    "SEARCH_COLUMN",
    "FilterField",
    "FilterModel",
    "parse_filter",
    "to_snake_case",
]
