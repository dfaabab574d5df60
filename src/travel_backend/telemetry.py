"""OpenTelemetry tracer provider setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

from travel_backend.shared import ConfigurationError

if TYPE_CHECKING:
    from travel_backend.settings import BackendSettings

logger = logging.getLogger(__name__)


def build_exporter(settings: BackendSettings) -> SpanExporter:
    """Return the span exporter selected by ``TRACING_EXPORTER``."""
    if settings.tracing_exporter == "console":
        return ConsoleSpanExporter()
    if settings.tracing_exporter == "otlp":
        return OTLPSpanExporter(
            endpoint=settings.otlp_endpoint, headers=settings.otlp_headers or None
        )
    msg = f"unknown tracing exporter: {settings.tracing_exporter}"
    raise ConfigurationError(msg)


def configure_tracing(settings: BackendSettings) -> TracerProvider | None:
    """Install a global SDK tracer provider when tracing is enabled.

    Returns the provider so the caller can shut it down and flush pending
    spans, or ``None`` when the no-op API tracer stays in place.
    """
    if not settings.tracing_enabled:
        logger.info("Tracing is disabled")
        return None

    logger.info("Tracing is enabled with the %s exporter", settings.tracing_exporter)
    resource = Resource.create(
        {
            "service.name": settings.app_name,
            "deployment.environment": settings.app_env,
        }
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(build_exporter(settings)))
    trace.set_tracer_provider(provider)
    return provider


__all__ = ["build_exporter", "configure_tracing"]
