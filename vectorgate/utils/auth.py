"""Gateway API-key check for session-linked writes.

Compares the caller's ``X-API-Key`` value against the configured secret
with :func:`hmac.compare_digest` so the comparison time does not depend on
how many leading characters match.
"""

from __future__ import annotations

import hmac

from vectorgate.utils.errors import UnauthorizedError


def verify_api_key(provided: str | None, expected: str | None) -> bool:
    """Return ``True`` when *provided* matches *expected*.

    A missing secret never authenticates anyone: with no key configured,
    session-linked writes are refused.
    """
    if not expected or not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_api_key(provided: str | None, expected: str | None) -> None:
    """Raise :class:`UnauthorizedError` unless the key check passes."""
    if not expected:
        raise UnauthorizedError("Session writes are disabled: no gateway API key is configured")
    if not verify_api_key(provided, expected):
        raise UnauthorizedError("Missing or invalid API key")
