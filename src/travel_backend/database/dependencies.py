"""FastAPI dependencies for database access."""

from functools import cache
from typing import Annotated

from fastapi import Depends

from travel_backend.database.service import DatabaseService
from travel_backend.database.unit_of_work import UnitOfWork
from travel_backend.settings import BackendSettings, get_settings

SettingsDep = Annotated[BackendSettings, Depends(get_settings)]


@cache
def _build_database_service(database_url: str) -> DatabaseService:
    """Create a cached :class:`DatabaseService` for the given connection string."""
    return DatabaseService(database_url)


def get_database(settings: SettingsDep) -> DatabaseService:
    """Return the cached database service instance."""
    return _build_database_service(settings.database_url)


def get_unit_of_work(
    db: Annotated[DatabaseService, Depends(get_database)],
) -> UnitOfWork:
    """Return a fresh pool-bound :class:`UnitOfWork` for the request."""
    return UnitOfWork(db)
