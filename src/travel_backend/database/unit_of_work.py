"""Transaction scoping and repository access."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

from opentelemetry import trace

from travel_backend.database.repositories import ProductRepository, UserRepository

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from opentelemetry.trace import Tracer
    from sqlalchemy.orm import Session, sessionmaker

    from travel_backend.database.service import DatabaseService

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class TransactionContext:
    """Tells repositories where their sessions come from.

    A pool-bound context opens, commits and closes a fresh session for every
    repository call. A transaction-bound context hands out the one session
    owned by an open :meth:`UnitOfWork.execute` block and never commits it.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        bound_session: Session | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._bound_session = bound_session

    @property
    def in_transaction(self) -> bool:
        return self._bound_session is not None

    @property
    def bound_session(self) -> Session | None:
        return self._bound_session

    @property
    def session_factory(self) -> sessionmaker[Session]:
        return self._session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield the session a single repository call should use."""
        if self._bound_session is not None:
            yield self._bound_session
            return

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


class UnitOfWork:
    """Entry point to repositories plus atomic execution of several calls.

    Repositories are created on first access and cached for the lifetime of
    this instance.
    """

    def __init__(
        self,
        database: DatabaseService,
        *,
        tracer: Tracer | None = None,
        context: TransactionContext | None = None,
    ) -> None:
        self._database = database
        self._tracer = tracer or trace.get_tracer(__name__)
        self._context = context or TransactionContext(database.session_factory)
        self._products: ProductRepository | None = None
        self._users: UserRepository | None = None

    @property
    def context(self) -> TransactionContext:
        return self._context

    @property
    def in_transaction(self) -> bool:
        return self._context.in_transaction

    @property
    def products(self) -> ProductRepository:
        if self._products is None:
            self._products = ProductRepository(self._context, tracer=self._tracer)
        return self._products

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self._context, tracer=self._tracer)
        return self._users

    def execute(self, fn: Callable[[UnitOfWork], ResultT]) -> ResultT:
        """Run *fn* atomically and return its result.

        Outside a transaction a new one is opened, committed when *fn* returns
        and rolled back when it raises. Inside a transaction a SAVEPOINT is
        used, so a failing inner block only undoes its own writes.
        """
        with self._tracer.start_as_current_span("UnitOfWork.execute") as span:
            bound = self._context.bound_session
            if bound is not None:
                span.set_attribute("uow.nested", True)
                with bound.begin_nested():
                    return fn(self)

            span.set_attribute("uow.nested", False)
            session = self._context.session_factory()
            try:
                with session.begin():
                    transactional = UnitOfWork(
                        self._database,
                        tracer=self._tracer,
                        context=TransactionContext(
                            self._context.session_factory, bound_session=session
                        ),
                    )
                    return fn(transactional)
            except Exception:
                logger.debug("Transaction rolled back", exc_info=True)
                raise
            finally:
                session.close()


__all__ = ["TransactionContext", "UnitOfWork"]
