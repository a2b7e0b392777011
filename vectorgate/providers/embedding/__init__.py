"""Embedding provider adapters and the named provider registry."""

from vectorgate.providers.embedding.anthropic_embedding_provider import (
    AnthropicEmbeddingProvider,
)
from vectorgate.providers.embedding.base import HttpEmbeddingProvider
from vectorgate.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from vectorgate.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from vectorgate.providers.embedding.registry import ProviderRegistry, build_provider

__all__ = [
    "AnthropicEmbeddingProvider",
    "HttpEmbeddingProvider",
    "OllamaEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "ProviderRegistry",
    "build_provider",
]
