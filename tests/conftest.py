"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

import os

os.environ.setdefault("AUTH_SECRET_KEY", "test-secret-key")

from decimal import Decimal  # noqa: E402
from typing import TYPE_CHECKING, Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import event  # noqa: E402

from travel_backend.api import create_api  # noqa: E402
from travel_backend.database import (  # noqa: E402
    BaseSchema,
    DatabaseService,
    ProductSchema,
    UnitOfWork,
    UserSchema,
    get_database,
)
from travel_backend.database.dependencies import _build_database_service  # noqa: E402
from travel_backend.settings import get_settings  # noqa: E402
from travel_backend.shared import Actor, Gender, UserRole  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("AUTH_SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("TRACING_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'travel.db'}"


@pytest.fixture
def database(database_url: str) -> Iterator[DatabaseService]:
    """File-backed SQLite database with the full schema and SAVEPOINT support."""
    service = DatabaseService(database_url)
    engine = service.engine

    # pysqlite opens transactions lazily; let SQLAlchemy emit BEGIN itself
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection: Any, _: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(connection: Any) -> None:
        connection.exec_driver_sql("BEGIN")

    BaseSchema.metadata.create_all(engine)
    yield service
    service.dispose()


@pytest.fixture
def uow(database: DatabaseService) -> UnitOfWork:
    return UnitOfWork(database)


@pytest.fixture
def actor() -> Actor:
    return Actor(id=7, name="tester")


@pytest.fixture
def make_product(uow: UnitOfWork, actor: Actor) -> Callable[..., ProductSchema]:
    def _make(
        name: str,
        *,
        price: str = "100.00",
        description: str | None = None,
        is_active: bool = True,
    ) -> ProductSchema:
        product = ProductSchema(
            name=name,
            description=description,
            price=Decimal(price),
            is_active=is_active,
            created_by=actor.as_audit(),
        )
        return uow.products.save(product)

    return _make


@pytest.fixture
def make_user(uow: UnitOfWork, actor: Actor) -> Callable[..., UserSchema]:
    def _make(
        full_name: str,
        *,
        email: str,
        phone: str,
        role: UserRole = UserRole.CUSTOMER,
        is_verified: bool = False,
    ) -> UserSchema:
        first_name, _, last_name = full_name.partition(" ")
        user = UserSchema(
            first_name=first_name,
            last_name=last_name or None,
            full_name=full_name,
            gender=Gender.FEMALE,
            email=email,
            phone=phone,
            password_hash="not-a-real-hash",
            role=role,
            is_verified=is_verified,
            created_by=actor.as_audit(),
        )
        return uow.users.save(user)

    return _make


@pytest.fixture
def client(
    monkeypatch: pytest.MonkeyPatch, database: DatabaseService, database_url: str
) -> Iterator[TestClient]:
    """HTTP client whose requests hit the test database."""
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("DB_CONNECT_RETRIES", "1")
    get_settings.cache_clear()
    app = create_api()
    app.dependency_overrides[get_database] = lambda: database
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    _build_database_service(database_url).dispose()
    _build_database_service.cache_clear()
