"""OpenAI-compatible embedding provider adapter.

Speaks the ``/v1/embeddings`` wire format used by OpenAI itself and by
compatible hosts (Azure OpenAI, TogetherAI, vLLM, LiteLLM).  Azure-style
deployments authenticate with an ``api-key`` header instead of a bearer
token; select that with ``auth_scheme: api-key``.
"""

from __future__ import annotations

from typing import Any

from vectorgate.providers.embedding.base import HttpEmbeddingProvider


class OpenAIEmbeddingProvider(HttpEmbeddingProvider):
    """Embedding provider for OpenAI-compatible ``/v1/embeddings`` endpoints.

    Request body is ``{"model": ..., "input": "<text>"}``; the vector is
    read from ``data[0].embedding``.
    """

    provider_type = "openai"
    default_path = "/v1/embeddings"

    def _build_body(self, text: str) -> dict[str, Any]:
        return {"model": self._config.model, "input": text}

    def _auth_headers(self) -> dict[str, str]:
        api_key = self._config.api_key
        if not api_key:
            return {}
        if self._config.auth_scheme == "api-key":
            return {"api-key": api_key}
        return {"Authorization": f"Bearer {api_key}"}

    def _extract_vectors(self, data: Any) -> list[Any]:
        return [item["embedding"] for item in data["data"]]
