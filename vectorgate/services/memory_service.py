"""Memory orchestration service.

Sits between the HTTP routes and the backends.  Every request passes the
same boundary checks before any provider or store is contacted:

    1. text / query must be non-empty
    2. caller metadata must not use reserved keys
    3. session-linked writes must carry the gateway API key
    4. the named (or default) embedding provider must be registered

Only then is the text embedded and handed to the in-process store or the
Qdrant store.  Backend errors pass through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from vectorgate.interfaces.session_store import ISessionStore
from vectorgate.models.memory import Embedding, SearchResult
from vectorgate.models.session import Session
from vectorgate.providers.embedding.registry import ProviderRegistry
from vectorgate.providers.vector_store.memory_store import InMemoryVectorStore
from vectorgate.providers.vector_store.qdrant_store import QdrantVectorStore
from vectorgate.utils.auth import require_api_key
from vectorgate.utils.errors import BadRequestError, NotConfiguredError, NotFoundError
from vectorgate.utils.logging import get_logger
from vectorgate.utils.metadata import check_reserved_keys, reserved_keys


class MemoryService:
    """Validates requests and routes them to providers and stores.

    The Qdrant store and the session store are optional; operations that
    need a missing backend raise :class:`NotConfiguredError`.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        memory_store: InMemoryVectorStore,
        vector_store: QdrantVectorStore | None = None,
        session_store: ISessionStore | None = None,
        gateway_api_key: str | None = None,
    ) -> None:
        self._registry = registry
        self._memory = memory_store
        self._vectors = vector_store
        self._sessions = session_store
        self._gateway_api_key = gateway_api_key
        self._reserved = reserved_keys(session_store is not None)
        self._logger = get_logger(__name__)

    @property
    def sessions_enabled(self) -> bool:
        return self._sessions is not None

    @property
    def vector_store_enabled(self) -> bool:
        return self._vectors is not None

    # ------------------------------------------------------------------
    # Embedding
    # ------------------------------------------------------------------

    async def embed(self, text: str, provider: str | None = None) -> tuple[str, Embedding]:
        """Embed *text* with the named or default provider.

        Returns
        -------
        tuple[str, list[float]]
            The registry name of the provider used and the vector.
        """
        _require_text(text, "text")
        name, embedder = self._registry.get(provider)
        vector = await embedder.embed(text)
        self._logger.info("text_embedded", provider=name, dimensions=len(vector))
        return name, vector

    # ------------------------------------------------------------------
    # In-process memory
    # ------------------------------------------------------------------

    async def remember(
        self,
        text: str,
        metadata: Mapping[str, str] | None = None,
        session: str | None = None,
        provider: str | None = None,
    ) -> str:
        """Embed *text* and store it in the in-process store."""
        _require_text(text, "text")
        check_reserved_keys(metadata, self._reserved)
        _, vector = await self.embed(text, provider)
        entry_id = self._memory.store(text, metadata, session, vector)
        self._logger.info("memory_remembered", id=entry_id, session=session)
        return entry_id

    async def recall(
        self,
        query: str,
        limit: int = 5,
        session: str | None = None,
        provider: str | None = None,
    ) -> list[SearchResult]:
        """Return in-process entries ranked by similarity to *query*."""
        _require_text(query, "query")
        _require_positive_limit(limit)
        _, vector = await self.embed(query, provider)
        return self._memory.search(vector, limit, session=session)

    def forget(self, entry_id: str) -> None:
        """Delete an in-process entry, raising :class:`NotFoundError` if absent."""
        if not self._memory.delete(entry_id):
            raise NotFoundError(f"Memory '{entry_id}' not found")
        self._logger.info("memory_forgotten", id=entry_id)

    # ------------------------------------------------------------------
    # Remote vectors (Qdrant)
    # ------------------------------------------------------------------

    async def upsert_vector(
        self,
        text: str,
        point_id: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        session_id: str | None = None,
        provider: str | None = None,
        api_key: str | None = None,
    ) -> str:
        """Embed *text* and upsert it into the Qdrant collection.

        A session-linked write (``session_id`` set) requires sessions to be
        enabled, a valid gateway API key and an existing session.  The
        session's ``updated_at`` is bumped after a successful write.
        """
        store = self._require_vector_store()
        _require_text(text, "text")
        check_reserved_keys(metadata, self._reserved)

        if session_id is not None:
            sessions = self._require_session_store()
            require_api_key(api_key, self._gateway_api_key)
            if await sessions.get(session_id) is None:
                raise NotFoundError(f"Session '{session_id}' not found")

        _, vector = await self.embed(text, provider)
        resolved_id = await store.upsert(
            text,
            vector,
            point_id=point_id,
            metadata=metadata,
            session_id=session_id,
        )

        if session_id is not None and self._sessions is not None:
            await self._sessions.touch(session_id)
        return resolved_id

    async def search_vectors(
        self,
        query: str,
        limit: int = 5,
        score_threshold: float | None = None,
        session_id: str | None = None,
        provider: str | None = None,
    ) -> list[SearchResult]:
        store = self._require_vector_store()
        _require_text(query, "query")
        _require_positive_limit(limit)
        if session_id is not None:
            self._require_session_store()
        _, vector = await self.embed(query, provider)
        return await store.search(
            vector,
            limit,
            score_threshold=score_threshold,
            session_id=session_id,
        )

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def create_session(self, tags: list[str] | None, api_key: str | None) -> Session:
        sessions = self._require_session_store()
        require_api_key(api_key, self._gateway_api_key)
        return await sessions.create(tags)

    async def get_session(self, session_id: str) -> Session:
        session = await self._require_session_store().get(session_id)
        if session is None:
            raise NotFoundError(f"Session '{session_id}' not found")
        return session

    async def list_sessions(self, limit: int = 50, offset: int = 0) -> list[Session]:
        if limit < 0 or offset < 0:
            raise BadRequestError("limit and offset must not be negative")
        return await self._require_session_store().list(limit=limit, offset=offset)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _require_vector_store(self) -> QdrantVectorStore:
        if self._vectors is None:
            raise NotConfiguredError("Qdrant vector store is not configured")
        return self._vectors

    def _require_session_store(self) -> ISessionStore:
        if self._sessions is None:
            raise NotConfiguredError("Sessions are not enabled")
        return self._sessions


def _require_text(value: str, field: str) -> None:
    if not value or not value.strip():
        raise BadRequestError(f"'{field}' must not be empty")


def _require_positive_limit(limit: int) -> None:
    if limit < 1:
        raise BadRequestError("limit must be at least 1")
