"""Domain models for vectorgate."""

from vectorgate.models.memory import Embedding, MemoryEntry, SearchResult
from vectorgate.models.session import Session

__all__ = [
    "Embedding",
    "MemoryEntry",
    "SearchResult",
    "Session",
]
