"""Abstract base class for text-embedding service providers.

Defines the contract for turning one text string into one embedding
vector.  Vendors (OpenAI-compatible endpoints, Ollama, Claude/Voyage)
differ only in request body shape, auth header and response envelope;
callers never see those differences.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations:
#   OpenAIEmbeddingProvider     -- /v1/embeddings, bearer or api-key header
#   OllamaEmbeddingProvider     -- /api/embed on a local Ollama server
#   AnthropicEmbeddingProvider  -- type "claude", x-api-key + anthropic-version
# Located in: vectorgate/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for embedding services resolved through the provider registry.

    Vectors are consumed by the in-process store and by the Qdrant store,
    both for writes and for query-time similarity search.
    """

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string.

        Parameters
        ----------
        text:
            Non-empty text to embed.  Callers validate emptiness before
            reaching the provider.

        Returns
        -------
        list[float]
            The first (and only) vector in the provider's response.

        Raises
        ------
        vectorgate.utils.errors.AuthenticationError
            The provider rejected the credentials (401/403), or a required
            key is missing.
        vectorgate.utils.errors.ProviderError
            Any other non-2xx status; carries the status and body text.
        vectorgate.utils.errors.InvalidResponseError
            The response body could not be parsed or held no vectors.
        vectorgate.utils.errors.TransportError
            The request never produced a response (network failure or
            timeout).  Not retried.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the vendor identifier (``"openai"``, ``"ollama"``, ``"claude"``)."""

    @abstractmethod
    def get_model_name(self) -> str:
        """Return the configured model name, e.g. ``"nomic-embed-text"``."""
