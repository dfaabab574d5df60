"""Decode driver errors raised by SQLAlchemy into structured exceptions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from sqlalchemy import UniqueConstraint

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.exc import IntegrityError

    from travel_backend.database.base import BaseSchema

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

_UNIQUE_DETAIL = re.compile(r"^Key \((.*?)\)=\((.*?)\) already exists\.$")
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (.+)$")


class ConstraintViolationError(Exception):
    """Raised when a write breaks a unique constraint."""

    def __init__(
        self,
        constraint: str | None,
        *,
        columns: tuple[str, ...] = (),
        values: dict[str, Any] | None = None,
    ) -> None:
        self.constraint = constraint
        self.columns = columns
        self.values = values or {}
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """Human readable description of the conflict."""
        if self.columns:
            return f"An entry with this {' and '.join(self.columns)} already exists."
        if self.constraint:
            return f"Data already exists: {self.constraint}"
        return "An entry with this data already exists."


def get_sqlstate(exc: IntegrityError) -> str | None:
    """Return the SQLSTATE reported by the driver, if any."""
    return getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)


def _convert_value(value: str) -> Any:
    if value == "t":
        return True
    if value == "f":
        return False
    return value


def parse_unique_detail(detail: str) -> dict[str, Any]:
    """Parse ``Key (a, b)=(x, y) already exists.`` into ``{"a": "x", "b": "y"}``."""
    match = _UNIQUE_DETAIL.match(detail.strip())
    if match is None:
        return {}
    keys = match.group(1).split(", ")
    values = match.group(2).split(", ")
    if len(keys) != len(values):
        return {}
    return {key: _convert_value(value) for key, value in zip(keys, values, strict=True)}


def _unique_constraint_for(
    model: type[BaseSchema], columns: tuple[str, ...]
) -> str | None:
    wanted = set(columns)
    table = model.__table__
    candidates = [
        constraint
        for constraint in table.constraints
        if isinstance(constraint, UniqueConstraint)
    ]
    candidates.extend(index for index in table.indexes if index.unique)
    for candidate in candidates:
        if {column.name for column in candidate.columns} == wanted:
            return str(candidate.name) if candidate.name else None
    return None


def _postgres_violation(exc: IntegrityError) -> ConstraintViolationError:
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    values = parse_unique_detail(getattr(diag, "message_detail", None) or "")
    return ConstraintViolationError(
        constraint, columns=tuple(values), values=values
    )


def _sqlite_violation(
    exc: IntegrityError, model: type[BaseSchema], values: Mapping[str, Any] | None
) -> ConstraintViolationError | None:
    match = _SQLITE_UNIQUE.search(str(exc.orig))
    if match is None:
        return None
    columns = tuple(
        qualified.strip().rsplit(".", 1)[-1] for qualified in match.group(1).split(",")
    )
    known = values or {}
    return ConstraintViolationError(
        _unique_constraint_for(model, columns),
        columns=columns,
        values={column: known.get(column) for column in columns},
    )


def constraint_violation(
    exc: IntegrityError,
    model: type[BaseSchema],
    values: Mapping[str, Any] | None = None,
) -> ConstraintViolationError | None:
    """Return a :class:`ConstraintViolationError` when *exc* is a unique violation.

    PostgreSQL reports the constraint name and the conflicting key. Drivers
    that do not (SQLite) report the columns only; the constraint is then
    looked up on the table and the values are read from *values*, a
    snapshot of the column values taken before the flush.
    """
    if get_sqlstate(exc) == UNIQUE_VIOLATION:
        return _postgres_violation(exc)
    return _sqlite_violation(exc, model, values)


__all__ = [
    "UNIQUE_VIOLATION",
    "ConstraintViolationError",
    "constraint_violation",
    "get_sqlstate",
    "parse_unique_detail",
]
