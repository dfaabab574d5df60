"""Generic repository shared by every entity table."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from opentelemetry import trace
from sqlalchemy import func, inspect, select, update
from sqlalchemy.exc import IntegrityError

from travel_backend.database.base import AuditedMixin
from travel_backend.database.errors import constraint_violation
from travel_backend.database.filters import FilterModel, parse_filter
from travel_backend.shared import ConfigurationError, NotFoundError, get_offset

if TYPE_CHECKING:
    from opentelemetry.trace import Tracer
    from sqlalchemy import Select

    from travel_backend.database.unit_of_work import TransactionContext


@dataclass(frozen=True, slots=True)
class Ordering:
    """Column and direction used to sort list queries."""

    column: str = "id"
    descending: bool = False


def _column_values(entity: object) -> dict[str, Any]:
    # read from the instance dict so expired or unloaded attributes never hit the DB
    state = inspect(entity)
    return {
        attribute.key: state.dict[attribute.key]
        for attribute in state.mapper.column_attrs
        if attribute.key in state.dict
    }


ModelT = TypeVar("ModelT", bound=AuditedMixin)
FilterT = TypeVar("FilterT", bound=FilterModel)


class Repository(Generic[ModelT, FilterT]):
    """CRUD operations over one soft-deletable table.

    Subclasses set :attr:`model` and may override :meth:`apply_filter` for
    filter fields the generic parser is told to ignore.
    """

    model: type[ModelT]

    def __init__(
        self, context: TransactionContext, *, tracer: Tracer | None = None
    ) -> None:
        self._context = context
        self._tracer = tracer or trace.get_tracer(__name__)

    def _span(self, operation: str) -> Any:
        return self._tracer.start_as_current_span(
            f"{type(self).__name__}.{operation}",
            attributes={"db.table": self.model.__tablename__},
        )

    def _live(self, statement: Select[Any]) -> Select[Any]:
        return statement.where(self.model.deleted_on.is_(None))

    def apply_filter(
        self, statement: Select[Any], filter_: FilterT | None
    ) -> Select[Any]:
        """Restrict *statement* by *filter_*."""
        return parse_filter(statement, self.model, filter_)

    def _order(self, statement: Select[Any], ordering: Ordering | None) -> Select[Any]:
        ordering = ordering or Ordering()
        table = self.model.__table__
        if ordering.column not in table.c:
            msg = f"{self.model.__name__} cannot be ordered by '{ordering.column}'"
            raise ConfigurationError(msg)
        column = table.c[ordering.column]
        statement = statement.order_by(
            column.desc() if ordering.descending else column.asc()
        )
        if ordering.column != "id":
            statement = statement.order_by(table.c.id.asc())
        return statement

    def find_all(
        self,
        page: int | None = None,
        size: int | None = None,
        filter_: FilterT | None = None,
        ordering: Ordering | None = None,
    ) -> list[ModelT]:
        """Return live rows matching *filter_*, one page at a time if asked."""
        with self._span("find_all"):
            statement = self.apply_filter(self._live(select(self.model)), filter_)
            statement = self._order(statement, ordering)
            if page is not None and size is not None:
                statement = statement.offset(get_offset(page, size)).limit(size)
            with self._context.session() as session:
                return list(session.scalars(statement).all())

    def count(self, filter_: FilterT | None = None) -> int:
        """Return the number of live rows matching *filter_*."""
        with self._span("count"):
            statement = self.apply_filter(
                self._live(select(func.count()).select_from(self.model)), filter_
            )
            with self._context.session() as session:
                return int(session.scalar(statement) or 0)

    def find_by_id(self, entity_id: int) -> ModelT:
        """Return the live row with *entity_id*."""
        with self._span("find_by_id"):
            statement = self._live(select(self.model)).where(
                self.model.id == entity_id
            )
            with self._context.session() as session:
                entity = session.scalars(statement).first()
            if entity is None:
                msg = f"{self.model.__name__} {entity_id} not found"
                raise NotFoundError(msg)
            return entity

    def save(self, entity: ModelT) -> ModelT:
        """Insert *entity* and return it with generated columns loaded."""
        with self._span("save"):
            values = _column_values(entity)
            try:
                with self._context.session() as session:
                    session.add(entity)
                    session.flush()
                    session.refresh(entity)
            except IntegrityError as exc:
                violation = constraint_violation(exc, self.model, values)
                if violation is None:
                    raise
                raise violation from exc
            return entity

    def update(self, entity: ModelT) -> ModelT:
        """Write every column of *entity* over the row with the same id."""
        with self._span("update"):
            values = _column_values(entity)
            try:
                with self._context.session() as session:
                    merged = session.merge(entity)
                    session.flush()
                    session.refresh(merged)
            except IntegrityError as exc:
                violation = constraint_violation(exc, self.model, values)
                if violation is None:
                    raise
                raise violation from exc
            return merged

    def delete(self, entity_id: int) -> None:
        """Soft-delete the row with *entity_id*; missing rows are ignored."""
        with self._span("delete"):
            statement = (
                update(self.model)
                .where(self.model.id == entity_id, self.model.deleted_on.is_(None))
                .values(deleted_on=datetime.now(UTC))
                .execution_options(synchronize_session=False)
            )
            with self._context.session() as session:
                session.execute(statement)


__all__ = ["FilterT", "ModelT", "Ordering", "Repository"]
