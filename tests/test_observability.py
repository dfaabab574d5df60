"""Tests for logging and tracing setup."""

from __future__ import annotations

import logging

import pytest
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from travel_backend.logging_config import configure_logging, resolve_log_level
from travel_backend.settings import BackendSettings
from travel_backend.telemetry import build_exporter, configure_tracing


def _settings(**overrides: object) -> BackendSettings:
    return BackendSettings(auth_secret_key="secret", **overrides)


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"app_env": "development"}, "DEBUG"),
        ({"app_env": "staging"}, "INFO"),
        ({"app_env": "production"}, "WARNING"),
        ({"app_env": "production", "app_log_level": "debug"}, "DEBUG"),
        ({"app_env": "development", "app_log_level": "warn"}, "WARNING"),
    ],
)
def test_resolve_log_level(overrides: dict[str, object], expected: str) -> None:
    assert resolve_log_level(_settings(**overrides)) == expected


def test_configure_logging_sets_package_level() -> None:
    configure_logging(_settings(app_env="staging"))

    assert logging.getLogger("travel_backend").level == logging.INFO

    configure_logging(_settings(app_env="development"))


def test_tracing_disabled_returns_no_provider() -> None:
    assert configure_tracing(_settings(tracing_enabled=False)) is None


def test_exporter_selection() -> None:
    assert isinstance(
        build_exporter(_settings(tracing_exporter="console")), ConsoleSpanExporter
    )
    assert isinstance(build_exporter(_settings(tracing_exporter="otlp")), OTLPSpanExporter)


def test_tracing_enabled_installs_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    installed: list[TracerProvider] = []
    monkeypatch.setattr(
        "travel_backend.telemetry.trace.set_tracer_provider", installed.append
    )

    provider = configure_tracing(
        _settings(tracing_enabled=True, tracing_exporter="console")
    )

    assert isinstance(provider, TracerProvider)
    assert installed == [provider]
    provider.shutdown()
