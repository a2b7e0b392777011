"""vectorgate API layer: routes, schemas and middleware."""

from vectorgate.api.middleware import RequestLoggingMiddleware, register_error_handlers
from vectorgate.api.routes import health_router, router
from vectorgate.api.schemas import ErrorResponse, HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "health_router",
    "register_error_handlers",
    "router",
]
