"""ASGI app and uvicorn launchers for the product and user catalogue API.

``app`` serves the routes under ``/api/v1``; ``run_dev`` and ``run_prod`` back
the ``travel-backend-dev`` and ``travel-backend-prod`` console scripts.
"""

from __future__ import annotations

import uvicorn

from travel_backend.api import create_api
from travel_backend.settings import get_settings

app = create_api()


def _run_uvicorn(*, reload: bool) -> None:
    """Serve ``app`` on the host and port from :class:`BackendSettings`."""
    config = get_settings()
    uvicorn.run(
        "travel_backend.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=reload,
    )


def run_dev() -> None:
    """Serve the catalogue API and reload when source files change."""
    _run_uvicorn(reload=True)


def run_prod() -> None:
    """Serve the catalogue API for deployment, without reloading."""
    _run_uvicorn(reload=False)
