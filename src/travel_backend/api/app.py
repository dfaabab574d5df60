"""Factory for constructing the FastAPI application."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from travel_backend.api.errors import register_exception_handlers
from travel_backend.api.routers import health_router, products_router, users_router
from travel_backend.database import get_database
from travel_backend.logging_config import configure_logging
from travel_backend.settings import BackendSettings, get_settings
from travel_backend.telemetry import configure_tracing

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from starlette.responses import Response

API_PREFIX = "/api/v1"
REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


def _log_request(
    request: Request, status_code: int, latency_ms: float, request_id: str
) -> None:
    client = request.client.host if request.client else "-"
    error = getattr(request.state, "error", None)
    args = (request.method, request.url.path, status_code, latency_ms, client)
    fmt = "%s %s -> %d in %.1fms from %s"
    if error is not None:
        logger.error(
            fmt + " [%s] failed with an error: %s", *args, request_id, error
        )
    elif status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(fmt + " [%s] server error", *args, request_id)
    elif status_code >= status.HTTP_400_BAD_REQUEST:
        logger.warning(fmt + " [%s] client error", *args, request_id)
    else:
        logger.info(fmt + " [%s]", *args, request_id)


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag the request with an id and log a one-line summary once it finishes."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        latency_ms = (time.perf_counter() - start) * 1000
        request.state.error = exc
        _log_request(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, latency_ms, request_id
        )
        raise
    latency_ms = (time.perf_counter() - start) * 1000
    _log_request(request, response.status_code, latency_ms, request_id)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_api(settings: BackendSettings | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    config = settings or get_settings()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        provider = configure_tracing(config)
        database = get_database(config)
        await run_in_threadpool(
            database.wait_until_ready,
            retries=config.db_connect_retries,
            interval=config.db_connect_retry_interval,
        )
        try:
            yield
        finally:
            if provider is not None:
                provider.shutdown()

    app = FastAPI(title="Travel API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)
    register_exception_handlers(app)
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(products_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    return app
