"""Gateway settings: environment variables plus the YAML config schema.

Two layers:

* :class:`Settings` reads process-level knobs from the environment (and a
  local ``.env`` file) via pydantic-settings.  Field ``qdrant_url`` maps to
  the ``QDRANT_URL`` variable, ``config_path`` to ``CONFIG_PATH`` and so on.
  Every field defaults to "unset" so the loader can tell an explicit
  override apart from a default.
* The ``*Config`` models describe ``config/config.yaml``: embedding
  providers, the optional Qdrant store, the optional session store and the
  gateway API key.  :func:`vectorgate.config.loader.load_config` merges the
  two.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DistanceMetric = Literal["Cosine", "Dot", "Euclid"]

_DISTANCE_ALIASES: dict[str, str] = {
    "cosine": "Cosine",
    "dot": "Dot",
    "euclid": "Euclid",
    "euclidean": "Euclid",
}


class Settings(BaseSettings):
    """Process settings sourced from environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: str = "config/config.yaml"
    app_env: str = "development"
    log_level: str = "INFO"
    app_host: str | None = None
    app_port: int | None = None

    # Remote vector store.  QDRANT_URL alone enables Qdrant when the YAML
    # has no ``qdrant`` section; the rest only adjust an enabled section.
    qdrant_url: str | None = None
    qdrant_collection: str | None = None
    qdrant_api_key: str | None = None
    qdrant_dimensions: int | None = None
    qdrant_distance: str | None = None

    session_db_path: str | None = None
    gateway_api_key: str | None = None


# ---------------------------------------------------------------------------
# YAML config schema
# ---------------------------------------------------------------------------


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 8080


class ProviderConfig(BaseModel):
    """One embedding provider entry under ``embedding.providers``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider_type: str = Field(alias="type")
    base_url: str
    model: str
    api_key: str | None = None
    # "bearer" -> ``Authorization: Bearer <key>``; "api-key" -> ``api-key: <key>``
    auth_scheme: Literal["bearer", "api-key"] = "bearer"
    embeddings_path: str | None = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class EmbeddingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_provider: str
    providers: dict[str, ProviderConfig] = Field(default_factory=dict)


class QdrantConfig(BaseModel):
    """Remote vector store settings."""

    model_config = ConfigDict(frozen=True)

    url: str = "http://localhost:6333"
    collection: str = "agent_memory"
    api_key: str | None = None
    dimensions: int = Field(default=768, gt=0)
    distance: DistanceMetric = "Cosine"

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("distance", mode="before")
    @classmethod
    def _normalise_distance(cls, value: object) -> object:
        if isinstance(value, str):
            return _DISTANCE_ALIASES.get(value.strip().lower(), value)
        return value


class SessionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    db_path: str = "data/sessions.db"


class AuthConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str | None = None


class GatewayConfig(BaseModel):
    """Fully resolved gateway configuration."""

    model_config = ConfigDict(frozen=True)

    server: ServerConfig = Field(default_factory=ServerConfig)
    embedding: EmbeddingConfig
    qdrant: QdrantConfig | None = None
    sessions: SessionConfig | None = None
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @property
    def sessions_enabled(self) -> bool:
        return self.sessions is not None
