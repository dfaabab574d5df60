"""Error translation shared by the domain services."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from travel_backend.database import ConstraintViolationError
from travel_backend.shared import AppError, DuplicateEntryError, ErrorCode, InternalError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger = logging.getLogger(__name__)


def duplicate_entry(
    violation: ConstraintViolationError,
    rules: Mapping[str, tuple[ErrorCode, str]],
) -> DuplicateEntryError:
    """Map a unique violation to the domain error registered for its constraint."""
    code, message = rules.get(
        violation.constraint or "",
        (ErrorCode.DUPLICATE_ENTRY, "unique constraint violated"),
    )
    return DuplicateEntryError(message, code=code, details=violation.values or None)


@contextmanager
def storage_errors(rules: Mapping[str, tuple[ErrorCode, str]]) -> Iterator[None]:
    """Translate storage failures raised inside the block into domain errors."""
    try:
        yield
    except AppError:
        raise
    except ConstraintViolationError as exc:
        raise duplicate_entry(exc, rules) from exc
    except SQLAlchemyError as exc:
        logger.exception("Database operation failed")
        raise InternalError("database operation failed") from exc


__all__ = ["duplicate_entry", "storage_errors"]
