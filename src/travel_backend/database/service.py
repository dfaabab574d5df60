"""Database engine and session management utilities."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from travel_backend.settings import BackendSettings, get_settings

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def _engine_options(url: str, config: BackendSettings) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": config.db_echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            return options
    options.update(
        pool_size=config.db_max_idle_conns,
        max_overflow=max(config.db_max_open_conns - config.db_max_idle_conns, 0),
        pool_recycle=config.db_conn_max_lifetime,
    )
    return options


class DatabaseService:
    """Wraps SQLAlchemy engine and session factory."""

    def __init__(
        self,
        url: str | None = None,
        *,
        settings: BackendSettings | None = None,
        engine: Engine | None = None,
    ) -> None:
        config = settings or get_settings()
        database_url = url or config.database_url
        self._engine = engine or create_engine(
            database_url, **_engine_options(database_url, config)
        )
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            class_=Session,
        )

    @property
    def engine(self) -> Engine:
        """Expose the SQLAlchemy engine."""

        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Expose the configured session factory."""

        return self._session_factory

    def wait_until_ready(self, *, retries: int, interval: float) -> None:
        """Ping the database until it answers or *retries* attempts fail."""

        for attempt in range(1, retries + 1):
            try:
                with self._engine.connect() as connection:
                    connection.execute(text("SELECT 1"))
            except OperationalError as exc:
                logger.warning(
                    "Database connection attempt %d/%d failed: %s",
                    attempt,
                    retries,
                    exc,
                )
                if attempt == retries:
                    raise
                time.sleep(interval)
            else:
                logger.info("Database connection established")
                return

    def dispose(self) -> None:
        """Close every pooled connection."""

        self._engine.dispose()
