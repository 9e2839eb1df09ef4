"""Observability setup for structured logging, Prometheus metrics and OpenTelemetry."""

import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from .config import Settings, settings as default_settings

# Prometheus metrics
REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=REGISTRY
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=REGISTRY
)

# Loggers that configure their own handlers unless told otherwise
_PROPAGATING_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Provider installed by setup_tracing
_tracer_provider: Optional[TracerProvider] = None


def add_trace_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Add the active span's trace context to log events."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict['trace_id'] = format(ctx.trace_id, '032x')
        event_dict['span_id'] = format(ctx.span_id, '016x')
    return event_dict


def setup_structured_logging(
    config: Optional[Settings] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog and route standard-library logging through it.

    Development renders human-readable console lines; every other environment
    renders one JSON object per line. Fields passed via ``extra=`` on stdlib
    loggers appear as top-level keys.

    Args:
        config: Settings deciding level and format; defaults to the global settings
        stream: Output stream; defaults to stdout
    """
    config = config or default_settings
    level = getattr(logging, config.log_level)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_trace_context,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    renderer = (
        structlog.dev.ConsoleRenderer()
        if config.debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    final_processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    # ConsoleRenderer prints tracebacks itself
    if not config.debug:
        final_processors.append(structlog.processors.format_exc_info)
    final_processors.append(renderer)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared_processors, structlog.stdlib.ExtraAdder()],
        processors=final_processors,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _PROPAGATING_LOGGERS:
        log = logging.getLogger(name)
        log.handlers.clear()
        log.propagate = True


def setup_tracing(config: Optional[Settings] = None) -> trace.Tracer:
    """
    Setup OpenTelemetry tracing.

    The global tracer provider can only be set once per process, so later
    calls (one per application startup) reuse the installed provider.
    """
    global _tracer_provider
    config = config or default_settings

    if _tracer_provider is not None:
        return trace.get_tracer(__name__)

    # Create resource
    resource = Resource.create({
        "service.name": config.service_name,
        "service.version": config.app_version,
        "environment": config.environment,
    })

    provider = TracerProvider(resource=resource)

    # Setup OTLP exporter (if OTLP endpoint is configured)
    if config.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=config.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    _tracer_provider = provider

    return trace.get_tracer(__name__)


def instrument_fastapi(app) -> None:
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


def record_request(method: str, endpoint: str, status_code: int, duration_seconds: float) -> None:
    """Record one served request in the Prometheus metrics."""
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
    REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration_seconds)


def get_prometheus_metrics() -> bytes:
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)
