"""Tests for the filter model to WHERE clause translation."""

from __future__ import annotations

from typing import Annotated

import pytest
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from travel_backend.database import (
    FilterField,
    FilterModel,
    ProductFilter,
    ProductSchema,
    UserFilter,
    UserSchema,
    parse_filter,
)
from travel_backend.database.filters import to_snake_case
from travel_backend.shared import ConfigurationError, UserRole


def _sql(statement) -> str:
    return str(
        statement.compile(
            dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
        )
    )


def test_all_null_filter_adds_no_predicates() -> None:
    statement = parse_filter(select(ProductSchema), ProductSchema, ProductFilter())

    assert statement.whereclause is None


def test_none_filter_is_accepted() -> None:
    statement = parse_filter(select(ProductSchema), ProductSchema, None)

    assert statement.whereclause is None


def test_equality_predicates_for_set_fields() -> None:
    filter_ = UserFilter(is_verified=True, role=UserRole.MUTHAWIF)

    sql = _sql(parse_filter(select(UserSchema), UserSchema, filter_))

    assert "users.is_verified = true" in sql
    assert "users.role = 'muthawif'" in sql
    assert "is_active" not in sql.split("WHERE", 1)[1]


def test_search_expands_to_or_of_ilike() -> None:
    filter_ = ProductFilter(search="abc")

    sql = _sql(parse_filter(select(ProductSchema), ProductSchema, filter_))
    where = sql.split("WHERE", 1)[1]

    assert where.count("ILIKE") == 2
    assert "products.name ILIKE" in where
    assert "products.description ILIKE" in where
    assert " OR " in where
    assert "abc" in where


def test_empty_search_term_adds_nothing() -> None:
    statement = parse_filter(
        select(ProductSchema), ProductSchema, ProductFilter(search="")
    )

    assert statement.whereclause is None


def test_ignored_fields_are_skipped() -> None:
    filter_ = ProductFilter(min_price=10, max_price=20)

    statement = parse_filter(select(ProductSchema), ProductSchema, filter_)

    assert statement.whereclause is None


def test_explicit_column_tag_overrides_field_name() -> None:
    class ActiveFilter(FilterModel):
        enabled: Annotated[bool | None, FilterField(column="is_active")] = None

    sql = _sql(
        parse_filter(select(ProductSchema), ProductSchema, ActiveFilter(enabled=False))
    )

    assert "products.is_active = false" in sql


def test_unknown_column_raises_configuration_error() -> None:
    class BrokenFilter(FilterModel):
        colour: str | None = None

    with pytest.raises(ConfigurationError):
        parse_filter(select(ProductSchema), ProductSchema, BrokenFilter(colour="red"))


def test_non_filter_model_raises_configuration_error() -> None:
    class NotAFilter(BaseModel):
        name: str | None = None

    with pytest.raises(ConfigurationError):
        parse_filter(select(ProductSchema), ProductSchema, NotAFilter(name="x"))


@pytest.mark.parametrize(
    ("name", "expected"),
    [("isActive", "is_active"), ("HTTPStatus", "http_status"), ("name", "name")],
)
def test_to_snake_case(name: str, expected: str) -> None:
    assert to_snake_case(name) == expected
