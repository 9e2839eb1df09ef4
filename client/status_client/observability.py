"""Structured logging for the client."""

import logging
import sys
from typing import Optional, TextIO

import structlog

from .config import ClientSettings


def setup_structured_logging(settings: ClientSettings, stream: Optional[TextIO] = None) -> None:
    """
    Route standard-library logging through structlog.

    Logs go to stderr by default so they never interleave with the rendered
    view on stdout.
    """
    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]

    final_processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if settings.debug:
        final_processors.append(structlog.dev.ConsoleRenderer())
    else:
        final_processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=final_processors,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.log_level))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
