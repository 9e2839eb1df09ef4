"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, settings
from .core.exceptions import generic_exception_handler, http_exception_handler
from .core.middleware import setup_middleware
from .core.observability import instrument_fastapi, setup_structured_logging, setup_tracing
from .routers import health_router, metrics_router, root_router, status_router

# Configure structured logging
setup_structured_logging(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup announces where the service listens. Shutdown runs after uvicorn
    has stopped accepting connections and drained in-flight requests.
    """
    config: Settings = app.state.settings

    setup_tracing(config)
    logger.info(
        f"Backend server running on port {config.port}",
        extra={
            "health_url": f"http://localhost:{config.port}/health",
            "environment": config.environment,
            "version": config.app_version,
        },
    )

    yield

    logger.info("Shutdown signal received, shutting down gracefully")
    logger.info("Process terminated")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to run with; defaults to the environment-derived settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    config = config or settings

    app = FastAPI(
        title="Merge Guard Status API",
        description="Process health, service status and application metadata for the merge-guard demo",
        version=config.app_version,
        lifespan=lifespan,
        # Only the documented routes are served; everything else is Not Found
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = config

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_middleware(app, config, enable_logging=True)

    # Instrument FastAPI with OpenTelemetry
    instrument_fastapi(app)

    # Register exception handlers
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Register API routers
    app.include_router(root_router)
    app.include_router(health_router)
    app.include_router(status_router)
    app.include_router(metrics_router)

    logger.debug("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


def run() -> None:
    """
    Serve the application with uvicorn.

    SIGINT/SIGTERM stop new connections, let in-flight responses finish for
    at most ``shutdown_timeout_seconds``, then exit with status 0.
    """
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=False,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
    )


if __name__ == "__main__":
    run()
