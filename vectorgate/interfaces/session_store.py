"""Abstract base class for session registry providers.

Sessions group session-linked vector writes.  The registry only tracks
identity, timestamps and tags; the vectors themselves live in the Qdrant
collection with a ``session_id`` payload field.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vectorgate.models.session import Session


class ISessionStore(ABC):
    """Contract for session persistence.

    All operations are async to support file- or network-backed stores.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create the backing schema if it does not exist yet."""

    @abstractmethod
    async def create(self, tags: list[str] | None = None) -> Session:
        """Create a session with a fresh UUIDv4 id.

        Parameters
        ----------
        tags:
            Free-form labels stored with the session.

        Returns
        -------
        Session
            The new session; ``created_at`` equals ``updated_at``.
        """

    @abstractmethod
    async def get(self, session_id: str) -> Session | None:
        """Return the session with *session_id*, or ``None`` if unknown."""

    @abstractmethod
    async def list(self, limit: int = 50, offset: int = 0) -> list[Session]:
        """Return sessions ordered newest first.

        Parameters
        ----------
        limit:
            Maximum rows to return.  ``0`` means no limit.
        offset:
            Rows to skip before the first returned session.
        """

    @abstractmethod
    async def touch(self, session_id: str) -> None:
        """Bump ``updated_at`` for *session_id*.

        Best effort: failures are logged by the implementation and never
        raised to the caller.
        """
