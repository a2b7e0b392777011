"""Shared pytest fixtures for the vectorgate test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from vectorgate.config.settings import (
    AuthConfig,
    EmbeddingConfig,
    GatewayConfig,
    ProviderConfig,
    QdrantConfig,
    SessionConfig,
)
from vectorgate.interfaces.embedding_provider import IEmbeddingProvider
from vectorgate.providers.embedding.registry import ProviderRegistry


# ---------------------------------------------------------------------------
# HTTP mocking
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served.

    ``responses`` is a list consumed in order; each item is either an
    ``httpx.Response`` or an exception to raise for that request.
    """

    def __init__(self, responses: list[httpx.Response | Exception]) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_client() -> Callable[[list[httpx.Response | Exception]], tuple[httpx.AsyncClient, RecordingTransport]]:
    """Factory returning an ``httpx.AsyncClient`` backed by canned responses."""

    def _make(responses: list[httpx.Response | Exception]) -> tuple[httpx.AsyncClient, RecordingTransport]:
        transport = RecordingTransport(responses)
        return httpx.AsyncClient(transport=transport), transport

    return _make


# ---------------------------------------------------------------------------
# Embedding providers
# ---------------------------------------------------------------------------


def _make_embedder(vector: list[float] | None = None, name: str = "fake") -> MagicMock:
    """Return a mock :class:`IEmbeddingProvider` whose ``embed`` returns *vector*."""
    provider = MagicMock(spec=IEmbeddingProvider)
    provider.embed = AsyncMock(return_value=vector if vector is not None else [1.0, 0.0, 0.0])
    provider.get_provider_name.return_value = name
    provider.get_model_name.return_value = f"{name}-model"
    return provider


@pytest.fixture
def make_embedder() -> Callable[..., MagicMock]:
    """Factory for mock embedding providers returning a fixed vector."""
    return _make_embedder


@pytest.fixture
def mock_embedder() -> MagicMock:
    return _make_embedder()


@pytest.fixture
def registry(mock_embedder: MagicMock) -> ProviderRegistry:
    return ProviderRegistry({"fake": mock_embedder}, default_provider="fake")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(type="ollama", base_url="http://ollama.test", model="nomic-embed-text")


@pytest.fixture
def qdrant_config() -> QdrantConfig:
    return QdrantConfig(url="http://qdrant.test", collection="test_memory", dimensions=3)


@pytest.fixture
def gateway_config(provider_config: ProviderConfig) -> GatewayConfig:
    """Minimal config: one Ollama provider, no Qdrant, no sessions."""
    return GatewayConfig(
        embedding=EmbeddingConfig(default_provider="local", providers={"local": provider_config}),
    )


@pytest.fixture
def full_gateway_config(
    provider_config: ProviderConfig,
    qdrant_config: QdrantConfig,
    tmp_path,
) -> GatewayConfig:
    """Config with Qdrant, sessions and a gateway API key enabled."""
    return GatewayConfig(
        embedding=EmbeddingConfig(default_provider="local", providers={"local": provider_config}),
        qdrant=qdrant_config,
        sessions=SessionConfig(db_path=str(tmp_path / "sessions.db")),
        auth=AuthConfig(api_key="secret-key"),
    )
