"""Reserved-key contract for caller-supplied metadata.

The gateway owns a small set of payload fields: ``text`` always, and
``session_id`` whenever the session feature is active.  Caller metadata
may not contain them in either backend.  The check runs at the request
boundary, before any embedding call or network request.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from vectorgate.utils.errors import BadRequestError

TEXT_KEY = "text"
SESSION_KEY = "session_id"


def reserved_keys(sessions_enabled: bool) -> frozenset[str]:
    """Return the payload keys owned by the gateway."""
    if sessions_enabled:
        return frozenset({TEXT_KEY, SESSION_KEY})
    return frozenset({TEXT_KEY})


def check_reserved_keys(
    metadata: Mapping[str, Any] | None,
    reserved: frozenset[str],
) -> None:
    """Raise :class:`BadRequestError` if *metadata* uses a reserved key."""
    if not metadata:
        return
    collisions = sorted(key for key in metadata if key in reserved)
    if collisions:
        key = collisions[0]
        raise BadRequestError(
            f"'{key}' is a reserved metadata key; it is used internally by the "
            "gateway. Please use a different key for your custom metadata."
        )
