"""Configuration: environment settings and the YAML config loader."""

from vectorgate.config.loader import load_config
from vectorgate.config.settings import (
    AuthConfig,
    EmbeddingConfig,
    GatewayConfig,
    ProviderConfig,
    QdrantConfig,
    ServerConfig,
    SessionConfig,
    Settings,
)

__all__ = [
    "AuthConfig",
    "EmbeddingConfig",
    "GatewayConfig",
    "ProviderConfig",
    "QdrantConfig",
    "ServerConfig",
    "SessionConfig",
    "Settings",
    "load_config",
]
