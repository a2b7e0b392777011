"""API middleware: request logging and error handling.

``RequestLoggingMiddleware`` logs one ``http_request`` event per request.
``register_error_handlers`` converts :class:`VectorGateError` subclasses
into JSON :class:`ErrorResponse` bodies with the status code the error
carries.  Full detail goes to the server log; clients only see the
sanitised message.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from vectorgate.api.schemas import ErrorResponse
from vectorgate.utils.errors import VectorGateError
from vectorgate.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


async def vectorgate_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a :class:`VectorGateError` as an :class:`ErrorResponse`."""
    if not isinstance(exc, VectorGateError):
        raise exc

    status_code = exc.status_code
    log = _logger.error if status_code >= 500 else _logger.warning
    log(
        "application_error",
        error_type=type(exc).__name__,
        message=exc.message,
        provider=exc.provider_name,
        status=status_code,
        path=str(request.url.path),
    )
    body = ErrorResponse(error=type(exc).__name__, detail=exc.client_message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VectorGateError, vectorgate_error_handler)
