"""Utility modules for vectorgate.

- **errors** -- Exception hierarchy rooted at VectorGateError, grouped by
  error origin (transport, backend-reported, validation, auth, not-found,
  not-configured).
- **logging** -- structlog setup: console output in development, JSON in
  production.
- **concurrency** -- Reader/writer lock guarding the in-process store.
- **similarity** -- Cosine similarity for linear-scan search.
- **metadata** -- Reserved payload keys and the boundary check for them.
- **auth** -- Constant-time API-key comparison for session-linked writes.
"""

from vectorgate.utils.auth import require_api_key, verify_api_key
from vectorgate.utils.concurrency import ReadWriteLock
from vectorgate.utils.errors import (
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    InvalidResponseError,
    NotConfiguredError,
    NotFoundError,
    ProviderError,
    ProviderNotFoundError,
    SessionStoreError,
    TransportError,
    UnauthorizedError,
    VectorGateError,
    VectorStoreApiError,
)
from vectorgate.utils.logging import configure_logging, get_logger
from vectorgate.utils.metadata import check_reserved_keys, reserved_keys
from vectorgate.utils.similarity import cosine_similarity

__all__ = [
    "AuthenticationError",
    "BadRequestError",
    "ConfigurationError",
    "InvalidResponseError",
    "NotConfiguredError",
    "NotFoundError",
    "ProviderError",
    "ProviderNotFoundError",
    "ReadWriteLock",
    "SessionStoreError",
    "TransportError",
    "UnauthorizedError",
    "VectorGateError",
    "VectorStoreApiError",
    "check_reserved_keys",
    "configure_logging",
    "cosine_similarity",
    "get_logger",
    "require_api_key",
    "reserved_keys",
    "verify_api_key",
]
