"""Named embedding provider registry.

Built once at startup from ``embedding.providers`` in the YAML config and
stored on ``app.state``.  After construction it is read-only, so request
handlers share it without locking.
"""

from __future__ import annotations

import httpx

from vectorgate.config.settings import EmbeddingConfig, ProviderConfig
from vectorgate.interfaces.embedding_provider import IEmbeddingProvider
from vectorgate.providers.embedding.anthropic_embedding_provider import (
    AnthropicEmbeddingProvider,
)
from vectorgate.providers.embedding.base import HttpEmbeddingProvider
from vectorgate.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from vectorgate.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from vectorgate.utils.errors import ConfigurationError, ProviderNotFoundError
from vectorgate.utils.logging import get_logger

logger = get_logger(__name__)

# Closed set of adapters keyed by the ``type`` field of a provider entry.
_PROVIDER_TYPES: dict[str, type[HttpEmbeddingProvider]] = {
    "openai": OpenAIEmbeddingProvider,
    "ollama": OllamaEmbeddingProvider,
    "claude": AnthropicEmbeddingProvider,
}


def build_provider(config: ProviderConfig, http_client: httpx.AsyncClient) -> IEmbeddingProvider:
    """Instantiate the adapter for ``config.provider_type``.

    Raises:
        ConfigurationError: If the type is not one of the supported vendors.
    """
    provider_cls = _PROVIDER_TYPES.get(config.provider_type.lower())
    if provider_cls is None:
        supported = ", ".join(sorted(_PROVIDER_TYPES))
        raise ConfigurationError(
            f"Unknown embedding provider type '{config.provider_type}' "
            f"(supported: {supported})"
        )
    return provider_cls(config, http_client)


class ProviderRegistry:
    """Maps configured provider names to embedding provider instances."""

    def __init__(
        self,
        providers: dict[str, IEmbeddingProvider],
        default_provider: str,
    ) -> None:
        self._providers = dict(providers)
        self._default = default_provider

    @classmethod
    def from_config(
        cls,
        config: EmbeddingConfig,
        http_client: httpx.AsyncClient,
    ) -> ProviderRegistry:
        providers = {
            name: build_provider(provider_config, http_client)
            for name, provider_config in config.providers.items()
        }
        if config.default_provider not in providers:
            logger.warning(
                "default_provider_not_registered",
                default_provider=config.default_provider,
                providers=sorted(providers),
            )
        logger.info(
            "provider_registry_built",
            providers=sorted(providers),
            default_provider=config.default_provider,
        )
        return cls(providers, config.default_provider)

    def get(self, name: str | None = None) -> tuple[str, IEmbeddingProvider]:
        """Resolve *name* (or the default) to ``(resolved_name, provider)``.

        Raises:
            ProviderNotFoundError: If the resolved name is not registered.
        """
        resolved = name or self._default
        provider = self._providers.get(resolved)
        if provider is None:
            raise ProviderNotFoundError(resolved)
        return resolved, provider

    @property
    def default_provider(self) -> str:
        return self._default

    def provider_names(self) -> list[str]:
        return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
