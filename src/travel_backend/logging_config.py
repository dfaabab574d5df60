"""Logging setup for the backend process."""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from travel_backend.settings import BackendSettings

LEVELS_BY_ENV = {
    "development": "DEBUG",
    "staging": "INFO",
    "production": "WARNING",
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_log_level(settings: BackendSettings) -> str:
    """Return the level name for *settings*, preferring ``APP_LOG_LEVEL``."""
    if settings.app_log_level is not None:
        level = settings.app_log_level.upper()
        return "WARNING" if level == "WARN" else level
    return LEVELS_BY_ENV.get(settings.app_env, "INFO")


def configure_logging(settings: BackendSettings) -> None:
    """Attach a console handler to the ``travel_backend`` logger tree."""
    level = resolve_log_level(settings)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": level,
                },
            },
            "loggers": {
                "travel_backend": {"handlers": ["console"], "level": level},
            },
        }
    )
    logging.getLogger(__name__).debug(
        "Logging configured for %s at %s", settings.app_env, level
    )


__all__ = ["configure_logging", "resolve_log_level"]
