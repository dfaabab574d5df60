"""Travel agency catalogue backend: products and users over a JSON REST API."""

from travel_backend.main import run_dev, run_prod
from travel_backend.settings import BackendSettings, get_settings

main = run_dev

__all__ = [
    "BackendSettings",
    "get_settings",
    "main",
    "run_dev",
    "run_prod",
]
