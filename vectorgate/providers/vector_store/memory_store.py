"""In-process vector store with linear-scan cosine search.

Entries live in an insertion-ordered dict guarded by a reader/writer lock:
``search`` holds the read side for the whole scan, ``store`` and
``delete`` take the write side.  Nothing is persisted; the store is empty
on every start.
"""

from __future__ import annotations

from collections.abc import Mapping

from vectorgate.models.memory import Embedding, MemoryEntry, SearchResult
from vectorgate.utils.concurrency import ReadWriteLock
from vectorgate.utils.logging import get_logger
from vectorgate.utils.similarity import cosine_similarity

logger = get_logger(__name__)


class InMemoryVectorStore:
    """Thread-safe in-process vector store.

    Search ranks by cosine similarity, descending.  Entries with equal
    scores keep insertion order (stable sort over an insertion-ordered
    dict).
    """

    def __init__(self) -> None:
        self._entries: dict[str, MemoryEntry] = {}
        self._lock = ReadWriteLock()

    def store(
        self,
        text: str,
        metadata: Mapping[str, str] | None,
        session: str | None,
        embedding: Embedding,
    ) -> str:
        """Insert a new entry and return its generated UUIDv4 id."""
        entry = MemoryEntry(
            text=text,
            metadata=dict(metadata or {}),
            session=session,
            embedding=list(embedding),
        )
        with self._lock.write_locked():
            self._entries[entry.id] = entry
            total = len(self._entries)
        logger.debug("memory_stored", id=entry.id, session=session, total=total)
        return entry.id

    def search(
        self,
        query_embedding: Embedding,
        limit: int,
        session: str | None = None,
    ) -> list[SearchResult]:
        """Return up to *limit* entries ranked by cosine similarity.

        When *session* is given only entries tagged with exactly that
        session are considered; untagged entries never match a filter.
        """
        if limit <= 0:
            return []

        with self._lock.read_locked():
            scored = [
                (cosine_similarity(query_embedding, entry.embedding), entry)
                for entry in self._entries.values()
                if session is None or entry.session == session
            ]

        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            SearchResult(
                id=entry.id,
                text=entry.text,
                metadata=dict(entry.metadata),
                session=entry.session,
                score=score,
            )
            for score, entry in scored[:limit]
        ]

    def delete(self, entry_id: str) -> bool:
        """Remove *entry_id*; return whether it existed."""
        with self._lock.write_locked():
            removed = self._entries.pop(entry_id, None) is not None
        if removed:
            logger.debug("memory_deleted", id=entry_id)
        return removed

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)
