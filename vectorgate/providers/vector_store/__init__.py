"""Vector store implementations.

Two backends with the same ranking contract:
    InMemoryVectorStore -- process-local, linear-scan cosine search.
    QdrantVectorStore   -- remote Qdrant collection over its REST API.
"""

from vectorgate.providers.vector_store.memory_store import InMemoryVectorStore
from vectorgate.providers.vector_store.qdrant_store import ProvisionState, QdrantVectorStore

__all__ = [
    "InMemoryVectorStore",
    "ProvisionState",
    "QdrantVectorStore",
]
