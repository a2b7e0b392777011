"""Custom exception hierarchy for vectorgate.

All application exceptions inherit from :class:`VectorGateError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "openai", "ollama", "qdrant") caused the failure,
and a ``status_code`` used when the error reaches the HTTP boundary.

The hierarchy is organized by error origin:

    VectorGateError  (base -- catch-all for any vectorgate error)
    +-- TransportError          (network failure / timeout)
    +-- ConfigurationError      (startup / invalid config)
    +-- BadRequestError         (caller validation failure)
    |   +-- ProviderNotFoundError
    +-- AuthenticationError     (credentials rejected by a provider)
    +-- UnauthorizedError       (caller failed the gateway's own key check)
    +-- NotFoundError           (unknown memory id / session id)
    +-- NotConfiguredError      (feature absent, e.g. no Qdrant configured)
    +-- InvalidResponseError    (unparseable backend body)
    +-- ProviderError           (non-2xx from an embedding provider)
    +-- VectorStoreApiError     (non-2xx from the remote vector store)
    +-- SessionStoreError       (session database failure)

Each component converts the failures it observes into one of these kinds
and passes them upward unchanged.
"""

from __future__ import annotations


class VectorGateError(Exception):
    """Base exception for all vectorgate errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[openai] Authentication failed``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    @property
    def client_message(self) -> str:
        """Message safe to return to API callers."""
        return self._message

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Transport / configuration
# ---------------------------------------------------------------------------

class TransportError(VectorGateError):
    """Raised when a network call fails or times out before a response arrives.

    The underlying detail is logged but never returned to API callers.
    """

    def __init__(
        self,
        message: str = "HTTP request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)

    @property
    def client_message(self) -> str:
        return "Internal error while contacting an upstream service"


class ConfigurationError(VectorGateError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Caller errors
# ---------------------------------------------------------------------------

class BadRequestError(VectorGateError):
    """Raised for caller mistakes: empty text, reserved metadata keys, bad ids."""

    status_code = 400

    def __init__(
        self,
        message: str = "Bad request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderNotFoundError(BadRequestError):
    """Raised when a request names an embedding provider that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(message=f"Provider '{name}' is not configured")
        self._name = name

    @property
    def name(self) -> str:
        return self._name


class AuthenticationError(VectorGateError):
    """Raised when provider credentials are missing or rejected (401/403)."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication failed: missing or invalid API key",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnauthorizedError(VectorGateError):
    """Raised when a caller fails the gateway's own API-key check."""

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(VectorGateError):
    """Raised when a memory entry or session does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str = "Not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotConfiguredError(VectorGateError):
    """Raised when an optional feature (Qdrant, sessions) is not configured.

    Distinct from a failure of that feature: callers see 503 rather than
    an upstream error.
    """

    status_code = 503

    def __init__(
        self,
        message: str = "Feature is not configured",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Backend-reported errors
# ---------------------------------------------------------------------------

class InvalidResponseError(VectorGateError):
    """Raised when a backend response cannot be parsed or carries no vectors."""

    status_code = 502

    def __init__(
        self,
        message: str = "Invalid response from backend",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderError(VectorGateError):
    """Raised when an embedding provider returns a non-success status.

    The provider's own status code is surfaced to the caller when it is a
    valid HTTP error status.
    """

    def __init__(
        self,
        status: int,
        message: str = "",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(
            message=f"Provider returned error: {status} - {message}",
            provider_name=provider_name,
        )
        self._status = status
        self._body = message

    @property
    def status(self) -> int:
        return self._status

    @property
    def body(self) -> str:
        return self._body

    @property
    def status_code(self) -> int:  # type: ignore[override]
        if 400 <= self._status <= 599:
            return self._status
        return 500


class VectorStoreApiError(VectorGateError):
    """Raised when the remote vector store returns a non-success status."""

    status_code = 502

    def __init__(
        self,
        status: int,
        message: str = "",
        provider_name: str | None = "qdrant",
    ) -> None:
        super().__init__(
            message=f"Vector store API error: {status} - {message}",
            provider_name=provider_name,
        )
        self._status = status
        self._body = message

    @property
    def status(self) -> int:
        return self._status

    @property
    def body(self) -> str:
        return self._body


class SessionStoreError(VectorGateError):
    """Raised when the session database cannot be read or written."""

    def __init__(
        self,
        message: str = "Session store operation failed",
        provider_name: str | None = "sqlite_session_store",
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
