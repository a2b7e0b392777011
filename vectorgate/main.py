"""vectorgate FastAPI application entry point.

Wires providers, stores and the memory service together and stores them on
``app.state``.  Configuration comes from ``.env`` / environment variables
(:class:`Settings`) and ``config/config.yaml`` (:func:`load_config`).

Startup order inside the lifespan:

    1. build the shared ``httpx.AsyncClient`` (30 s timeout)
    2. build the embedding provider registry
    3. initialise the session database, when sessions are enabled
    4. provision the Qdrant collection, when Qdrant is enabled
       (retries transient failures; any other failure aborts startup)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
import uvicorn
from fastapi import FastAPI

from vectorgate import __version__
from vectorgate.api.middleware import RequestLoggingMiddleware, register_error_handlers
from vectorgate.api.routes import health_router
from vectorgate.api.routes import router as api_router
from vectorgate.config.loader import load_config
from vectorgate.config.settings import GatewayConfig, Settings
from vectorgate.providers.embedding.registry import ProviderRegistry
from vectorgate.providers.session.sqlite_session_store import SQLiteSessionStore
from vectorgate.providers.vector_store.memory_store import InMemoryVectorStore
from vectorgate.providers.vector_store.qdrant_store import QdrantVectorStore
from vectorgate.services.memory_service import MemoryService
from vectorgate.utils.logging import configure_logging, get_logger

_HTTP_TIMEOUT_S = 30.0

settings = Settings()
configure_logging(log_level=settings.log_level, app_env=settings.app_env)
_logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component wiring
# ---------------------------------------------------------------------------


def build_components(config: GatewayConfig, http_client: httpx.AsyncClient) -> dict[str, Any]:
    """Construct every backend and the memory service.

    Returns a flat dict of named components to be stored on ``app.state``.
    Nothing here performs I/O; initialisation happens in the lifespan.
    """
    registry = ProviderRegistry.from_config(config.embedding, http_client)
    memory_store = InMemoryVectorStore()

    session_store = None
    if config.sessions is not None:
        session_store = SQLiteSessionStore(config.sessions.db_path)

    vector_store = None
    if config.qdrant is not None:
        vector_store = QdrantVectorStore(
            config.qdrant,
            http_client,
            sessions_enabled=session_store is not None,
        )

    memory_service = MemoryService(
        registry=registry,
        memory_store=memory_store,
        vector_store=vector_store,
        session_store=session_store,
        gateway_api_key=config.auth.api_key,
    )

    return {
        "config": config,
        "http_client": http_client,
        "registry": registry,
        "memory_store": memory_store,
        "vector_store": vector_store,
        "session_store": session_store,
        "memory_service": memory_service,
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    config: GatewayConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    ``config`` and ``http_client`` may be injected (tests pass a client
    backed by ``httpx.MockTransport``); otherwise the config is loaded
    from ``app_settings.config_path`` and a client is created and closed
    by the lifespan.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
        resolved = config or load_config(settings=app_settings)
        owns_client = http_client is None
        client = http_client or httpx.AsyncClient(timeout=_HTTP_TIMEOUT_S)

        try:
            components = build_components(resolved, client)
            for key, value in components.items():
                setattr(application.state, key, value)

            if components["session_store"] is not None:
                await components["session_store"].initialize()
            if components["vector_store"] is not None:
                await components["vector_store"].ensure_collection()

            _logger.info(
                "app_startup",
                version=__version__,
                environment=app_settings.app_env,
                providers=components["registry"].provider_names(),
                default_provider=components["registry"].default_provider,
                qdrant=resolved.qdrant is not None,
                sessions=resolved.sessions_enabled,
            )

            yield
        finally:
            if owns_client:
                await client.aclose()
            _logger.info("app_shutdown", closed_http_client=owns_client)

    application = FastAPI(
        title="vectorgate",
        version=__version__,
        description=(
            "Embedding gateway and vector memory service: embed text with a "
            "named provider, then store and search it in-process or in Qdrant."
        ),
        lifespan=_lifespan,
    )

    application.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    server = load_config(settings=settings).server
    uvicorn.run(
        "vectorgate.main:app",
        host=server.host,
        port=server.port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    main()
