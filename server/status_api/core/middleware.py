"""Custom middleware for request tracking and logging."""

import logging
import time
import uuid
from typing import Callable, Dict, Mapping, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import Settings
from .exceptions import internal_error_response
from .observability import record_request


logger = logging.getLogger(__name__)

# Same set and values as helmet's defaults
SECURITY_HEADERS: Dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an ID for log correlation.

    A caller-supplied ``X-Request-ID`` is reused, otherwise a UUID4 is minted.
    The ID is stored on ``request.state``, bound into the structlog context
    for every record emitted while the request is served, and echoed back.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

        response.headers[self.header_name] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add hardening headers to every response, error responses included.

    Headers a handler already set are left alone.
    """

    def __init__(self, app: ASGIApp, headers: Optional[Mapping[str, str]] = None):
        super().__init__(app)
        self.headers = dict(SECURITY_HEADERS if headers is None else headers)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs every HTTP request once it completes.

    Each record carries method, path, status code and duration. Exceptions
    escaping the route handlers are logged and converted into the uniform
    error response here, so the process keeps serving.
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: Settings,
        skip_paths: Optional[list] = None,
    ):
        super().__init__(app)
        self.settings = settings
        self.skip_paths = skip_paths or []

    def _should_log(self, path: str) -> bool:
        """Check if request should be logged."""
        return path not in self.skip_paths

    @staticmethod
    def _endpoint_label(request: Request) -> str:
        """Route template for metrics labels, keeping cardinality bounded."""
        route = request.scope.get("route")
        return getattr(route, "path", "unmatched")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log information."""
        start_time = time.perf_counter()
        error = None

        try:
            response = await call_next(request)
        except Exception as e:
            error = e
            logger.error(
                "Unhandled exception while serving request",
                exc_info=e,
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "method": request.method,
                    "path": request.url.path,
                },
            )
            response = internal_error_response(request, e, self.settings)

        duration = time.perf_counter() - start_time
        status_code = response.status_code
        record_request(request.method, self._endpoint_label(request), status_code, duration)

        if not self._should_log(request.url.path):
            return response

        log_data = {
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration * 1000, 2),
        }
        if error is not None:
            log_data["error"] = str(error)

        message = f"{request.method} {request.url.path} - {status_code} - {log_data['duration_ms']}ms"

        # Log at appropriate level based on status code
        if status_code >= 500:
            logger.error(message, extra=log_data)
        elif status_code >= 400:
            logger.warning(message, extra=log_data)
        else:
            logger.info(message, extra=log_data)

        return response


def setup_middleware(app, settings: Settings, enable_logging: bool = True) -> None:
    """
    Setup all middleware on the FastAPI app.

    Args:
        app: FastAPI application instance
        settings: Settings controlling error verbosity
        enable_logging: Whether to enable request logging middleware
    """
    # Add middleware in reverse order (last added is first executed)
    if enable_logging:
        app.add_middleware(LoggingMiddleware, settings=settings)

    # Outside the logging middleware so converted faults get the headers too
    app.add_middleware(SecurityHeadersMiddleware)

    # Request ID middleware (outermost so every log line can carry the ID)
    app.add_middleware(RequestIDMiddleware)
