"""Public interface definitions for pluggable backends.

Concrete adapters implement these interfaces and are injected at startup
in ``vectorgate/main.py``.

    Interface            ->  Concrete implementations (in vectorgate/providers/)
    IEmbeddingProvider   ->  OpenAIEmbeddingProvider, OllamaEmbeddingProvider,
                             AnthropicEmbeddingProvider
    ISessionStore        ->  SQLiteSessionStore
"""

from vectorgate.interfaces.embedding_provider import IEmbeddingProvider
from vectorgate.interfaces.session_store import ISessionStore

__all__ = [
    "IEmbeddingProvider",
    "ISessionStore",
]
