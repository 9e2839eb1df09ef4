"""Tests for startup, shutdown and process-wide setup."""

import logging

import pytest
import structlog
from opentelemetry import trace

from status_api import main
from status_api.core import observability
from status_api.core.observability import setup_tracing


def test_run_serves_with_graceful_shutdown(monkeypatch):
    """run() hands the app to uvicorn with the configured grace period."""
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    main.run()

    [(args, kwargs)] = calls
    assert args == (main.app,)
    assert kwargs["host"] == main.settings.host
    assert kwargs["port"] == main.settings.port
    assert kwargs["timeout_graceful_shutdown"] == main.settings.shutdown_timeout_seconds
    assert kwargs["log_config"] is None
    assert kwargs["access_log"] is False


@pytest.mark.asyncio
async def test_lifespan_logs_startup_and_shutdown(test_settings, caplog):
    caplog.set_level(logging.INFO, logger="status_api.main")
    app = main.create_app(test_settings)

    async with app.router.lifespan_context(app):
        pass

    messages = [record.getMessage() for record in caplog.records if record.name == "status_api.main"]
    assert "Backend server running on port 3001" in messages
    assert messages[-2:] == [
        "Shutdown signal received, shutting down gracefully",
        "Process terminated",
    ]


def test_tracer_provider_installed_once(test_settings):
    """Repeated startups reuse the provider instead of replacing it."""
    setup_tracing(test_settings)
    provider = observability._tracer_provider

    setup_tracing(test_settings)

    assert provider is not None
    assert observability._tracer_provider is provider
    assert trace.get_tracer_provider() is provider


def test_logging_configured_on_import():
    """Importing the application routes stdlib logging through structlog."""
    formatters = [handler.formatter for handler in logging.getLogger().handlers]

    assert any(isinstance(formatter, structlog.stdlib.ProcessorFormatter) for formatter in formatters)
