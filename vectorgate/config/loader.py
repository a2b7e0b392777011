"""YAML configuration loader with environment variable overrides.

Configuration is resolved in layers (later layers override earlier):

  1. config/config.yaml  -- providers and optional store sections
  2. .env file           -- local developer overrides (not committed)
  3. Environment vars    -- set at deploy time

Overrides are merged into the raw YAML mapping *before* validation, so a
value supplied through the environment goes through the same pydantic
checks as one written in the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from vectorgate.config.settings import GatewayConfig, Settings
from vectorgate.utils.errors import ConfigurationError
from vectorgate.utils.logging import get_logger

logger = get_logger(__name__)


def load_config(path: str | None = None, settings: Settings | None = None) -> GatewayConfig:
    """Load the YAML config and apply environment-based overrides.

    Args:
        path: Path to the YAML file.  Defaults to ``settings.config_path``.
        settings: Pre-built settings; a fresh :class:`Settings` is read
            from the environment when omitted.

    Returns:
        The validated :class:`GatewayConfig`.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            fails schema validation.
    """
    settings = settings or Settings()
    config_path = Path(path or settings.config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping at the top level")

    _apply_env_overrides(raw, settings)

    try:
        config = GatewayConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

    logger.info(
        "config_loaded",
        path=str(config_path),
        providers=sorted(config.embedding.providers),
        default_provider=config.embedding.default_provider,
        qdrant_enabled=config.qdrant is not None,
        sessions_enabled=config.sessions_enabled,
    )
    return config


def _apply_env_overrides(raw: dict[str, Any], settings: Settings) -> None:
    """Merge environment values into the raw YAML mapping in place."""
    server = _section(raw, "server")
    if settings.app_host is not None:
        server["host"] = settings.app_host
    if settings.app_port is not None:
        server["port"] = settings.app_port

    qdrant = raw.get("qdrant")
    if qdrant is None and settings.qdrant_url:
        qdrant = raw["qdrant"] = {}
    if isinstance(qdrant, dict):
        qdrant.update(
            _present(
                url=settings.qdrant_url,
                collection=settings.qdrant_collection,
                api_key=settings.qdrant_api_key,
                dimensions=settings.qdrant_dimensions,
                distance=settings.qdrant_distance,
            ),
        )

    if settings.session_db_path:
        sessions = raw.get("sessions")
        if not isinstance(sessions, dict):
            sessions = raw["sessions"] = {}
        sessions["db_path"] = settings.session_db_path

    if settings.gateway_api_key:
        _section(raw, "auth")["api_key"] = settings.gateway_api_key


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    if not isinstance(value, dict):
        value = raw[key] = {}
    return value


def _present(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
