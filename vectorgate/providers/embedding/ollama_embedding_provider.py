"""Ollama embedding provider adapter.

Calls the local Ollama server's ``/api/embed`` endpoint.  No credentials
are needed for a local server; when an ``api_key`` is configured (e.g. an
Ollama instance behind an authenticating proxy) it is sent as a bearer
token.
"""

from __future__ import annotations

from typing import Any

from vectorgate.providers.embedding.base import HttpEmbeddingProvider


class OllamaEmbeddingProvider(HttpEmbeddingProvider):
    """Embedding provider backed by Ollama (e.g. ``nomic-embed-text``).

    The response envelope is ``{"embeddings": [[...], ...]}``; only the
    first vector is used.
    """

    provider_type = "ollama"
    default_path = "/api/embed"

    def _build_body(self, text: str) -> dict[str, Any]:
        return {"model": self._config.model, "input": text}

    def _auth_headers(self) -> dict[str, str]:
        if self._config.api_key:
            return {"Authorization": f"Bearer {self._config.api_key}"}
        return {}

    def _extract_vectors(self, data: Any) -> list[Any]:
        return data["embeddings"]
