"""Copy data between request payloads, schemas and response models."""

from __future__ import annotations

from collections.abc import Iterable, Sized
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from travel_backend.shared import MappingError

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _column_types(target: object) -> dict[str, type] | None:
    try:
        mapper = inspect(type(target))
    except NoInspectionAvailable:
        return None
    types: dict[str, type] = {}
    for attribute in mapper.column_attrs:
        column = attribute.columns[0]
        try:
            types[attribute.key] = column.type.python_type
        except NotImplementedError:
            continue
    return types


class Mapper:
    """Field-by-field copier matching attributes by name."""

    def to_model(
        self, src: BaseModel, dst: object, *, exclude: Iterable[str] = ()
    ) -> object:
        """Copy non-empty fields of *src* onto *dst* and return *dst*.

        ``None`` and empty strings or collections are skipped so a partial
        update leaves the stored value alone. Values whose type does not fit
        a mapped column raise :class:`MappingError`.
        """
        skipped = set(exclude)
        column_types = _column_types(dst)
        for name in type(src).model_fields:
            if name in skipped:
                continue
            value = getattr(src, name)
            if _is_empty(value):
                continue
            if column_types is not None:
                if name not in column_types:
                    continue
                expected = column_types[name]
                if not isinstance(value, expected):
                    msg = (
                        f"cannot copy {type(value).__name__} into "
                        f"{type(dst).__name__}.{name} ({expected.__name__})"
                    )
                    raise MappingError(msg)
            elif not hasattr(dst, name):
                continue
            setattr(dst, name, value)
        return dst

    def to_response(self, src: object, response_type: type[ResponseT]) -> ResponseT:
        """Build *response_type* from every matching attribute of *src*."""
        try:
            return response_type.model_validate(src, from_attributes=True)
        except ValidationError as exc:
            raise MappingError() from exc

    def to_responses(
        self, items: Iterable[object], response_type: type[ResponseT]
    ) -> list[ResponseT]:
        """List variant of :meth:`to_response`."""
        return [self.to_response(item, response_type) for item in items]


__all__ = ["Mapper"]
