"""Claude-side embedding provider adapter (config type ``claude``).

Anthropic does not host its own embedding model; the recommended route is
Voyage AI's OpenAI-shaped embeddings endpoint, reached with Anthropic-style
headers (``x-api-key`` and ``anthropic-version``).  Unlike the other
adapters this one refuses to send a request without a key.
"""

from __future__ import annotations

from typing import Any

from vectorgate.providers.embedding.base import HttpEmbeddingProvider
from vectorgate.utils.errors import AuthenticationError

_ANTHROPIC_VERSION = "2023-06-01"


class AnthropicEmbeddingProvider(HttpEmbeddingProvider):
    """Embedding provider for the ``claude`` config type.

    Request body wraps the text in a list (``"input": ["<text>"]``); the
    vector is read from ``data[0].embedding``.
    """

    provider_type = "claude"
    default_path = "/v1/embeddings"

    async def embed(self, text: str) -> list[float]:
        if not self._config.api_key:
            raise AuthenticationError(
                message="Claude embedding provider requires an API key",
                provider_name=self.provider_type,
            )
        return await super().embed(text)

    def _build_body(self, text: str) -> dict[str, Any]:
        return {"model": self._config.model, "input": [text]}

    def _auth_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._config.api_key or "",
            "anthropic-version": _ANTHROPIC_VERSION,
        }

    def _extract_vectors(self, data: Any) -> list[Any]:
        return [item["embedding"] for item in data["data"]]
