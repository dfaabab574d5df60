"""Dependency providers for FastAPI routers."""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from travel_backend.api.services import (
    AuthService,
    Mapper,
    ProductService,
    UserService,
)
from travel_backend.database import UnitOfWork, get_unit_of_work
from travel_backend.settings import BackendSettings, get_settings
from travel_backend.shared import Actor

_security = HTTPBearer(auto_error=False)
_mapper = Mapper()


def get_auth_service(
    settings: BackendSettings = Depends(get_settings),
) -> AuthService:
    """Return an :class:`AuthService` bound to the current settings."""

    return AuthService(settings=settings)


def get_mapper() -> Mapper:
    """Return the shared :class:`Mapper` instance."""

    return _mapper


def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    auth_service: AuthService = Depends(get_auth_service),
    settings: BackendSettings = Depends(get_settings),
) -> Actor:
    """Resolve who is making the request.

    A bearer token must decode to an actor; requests without one act as the
    configured default actor.
    """

    if credentials is None:
        return Actor(id=settings.default_actor_id, name=settings.default_actor_name)
    return auth_service.decode_access_token(credentials.credentials)


def get_product_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    mapper: Mapper = Depends(get_mapper),
) -> ProductService:
    return ProductService(uow, mapper)


def get_user_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    mapper: Mapper = Depends(get_mapper),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserService:
    return UserService(uow, mapper, auth_service)


__all__ = [
    "get_auth_service",
    "get_current_actor",
    "get_mapper",
    "get_product_service",
    "get_user_service",
]
