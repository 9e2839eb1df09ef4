"""Error responses and exception handlers.

Two categories reach clients:

* Not Found: unknown route, or a known route with an unsupported method.
* Internal Server Error: any exception escaping a route handler. The message
  is redacted and the traceback omitted outside development mode.
"""

import logging
import traceback
from http import HTTPStatus
from typing import List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from ..schemas.common import ErrorResponse, iso_timestamp

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS: List[str] = [
    "GET /",
    "GET /health",
    "GET /api/status",
    "GET /api/info",
]

REDACTED_MESSAGE = "Something went wrong"


def _settings_for(request: Request) -> Settings:
    return request.app.state.settings


def not_found_response(request: Request) -> JSONResponse:
    """Build the 404 response for an undefined route."""
    payload = ErrorResponse(
        error="Not Found",
        message=f"Endpoint {request.method} {request.url.path} not found",
        timestamp=iso_timestamp(),
        available_endpoints=list(AVAILABLE_ENDPOINTS),
    )
    return JSONResponse(status_code=404, content=payload.to_content())


def _fault_status(exc: Exception) -> int:
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and 400 <= status_code < 600:
        return status_code
    return 500


def internal_error_response(
    request: Request,
    exc: Exception,
    settings: Optional[Settings] = None,
) -> JSONResponse:
    """
    Convert an unhandled exception into an error response.

    Args:
        request: Request being served when the exception escaped
        exc: The exception
        settings: Settings deciding verbosity; defaults to the app's settings

    Returns:
        JSONResponse: Error payload with the exception's status or 500
    """
    settings = settings or _settings_for(request)

    payload = ErrorResponse(
        error="Internal Server Error",
        message=(str(exc) or exc.__class__.__name__) if settings.debug else REDACTED_MESSAGE,
        timestamp=iso_timestamp(),
    )
    if settings.debug:
        payload.stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return JSONResponse(status_code=_fault_status(exc), content=payload.to_content())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Exception handler for HTTP exceptions raised by routing or handlers.

    404 and 405 both mean "no GET handler for this path" and answer Not Found.
    """
    if exc.status_code in (404, 405):
        return not_found_response(request)

    try:
        category = HTTPStatus(exc.status_code).phrase
    except ValueError:
        category = "Error"

    payload = ErrorResponse(
        error=category,
        message=str(exc.detail),
        timestamp=iso_timestamp(),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=payload.to_content(),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler for anything the route handlers did not handle.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Internal Server Error payload
    """
    logger.error(
        "Unhandled exception while serving request",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    return internal_error_response(request, exc)
