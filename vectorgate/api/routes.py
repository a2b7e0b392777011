"""FastAPI routes for the vectorgate HTTP API.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern.

Endpoint                       Method  Description
/health                        GET     Providers, vector store and session status
/api/embed                     POST    Embed text with a named or default provider
/api/memory                    POST    Store text in the in-process store
/api/memory/search             POST    Ranked search over the in-process store
/api/memory/{id}               DELETE  Remove an in-process entry
/api/vectors                   POST    Upsert text into the Qdrant collection
/api/vectors/search            POST    Ranked search over the Qdrant collection
/api/sessions                  POST    Create a session (X-API-Key required)
/api/sessions                  GET     List sessions, newest first
/api/sessions/{id}             GET     Fetch one session
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query, Request, Response

from vectorgate import __version__
from vectorgate.api.schemas import (
    CreateSessionRequest,
    EmbedRequest,
    EmbedResponse,
    ErrorResponse,
    HealthResponse,
    IdResponse,
    SearchMemoryRequest,
    SearchResponse,
    SearchVectorsRequest,
    SessionListResponse,
    StoreMemoryRequest,
    UpsertVectorRequest,
)
from vectorgate.models.session import Session
from vectorgate.providers.embedding.registry import ProviderRegistry
from vectorgate.providers.vector_store.memory_store import InMemoryVectorStore
from vectorgate.providers.vector_store.qdrant_store import QdrantVectorStore
from vectorgate.services.memory_service import MemoryService

router = APIRouter(prefix="/api")
health_router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_memory_service(request: Request) -> MemoryService:
    return request.app.state.memory_service


def _get_registry(request: Request) -> ProviderRegistry:
    return request.app.state.registry


def _get_memory_store(request: Request) -> InMemoryVectorStore:
    return request.app.state.memory_store


def _get_vector_store(request: Request) -> QdrantVectorStore | None:
    return getattr(request.app.state, "vector_store", None)


MemoryServiceDep = Annotated[MemoryService, Depends(_get_memory_service)]
RegistryDep = Annotated[ProviderRegistry, Depends(_get_registry)]
MemoryStoreDep = Annotated[InMemoryVectorStore, Depends(_get_memory_store)]
VectorStoreDep = Annotated[QdrantVectorStore | None, Depends(_get_vector_store)]
ApiKeyHeader = Annotated[str | None, Header(alias="X-API-Key")]


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@health_router.get("/health", response_model=HealthResponse)
async def health(
    registry: RegistryDep,
    memory_store: MemoryStoreDep,
    vector_store: VectorStoreDep,
    service: MemoryServiceDep,
) -> HealthResponse:
    if vector_store is not None:
        store_info = {"backend": "qdrant", "collection": vector_store.collection}
    else:
        store_info = {"backend": "memory", "entries": len(memory_store)}
    return HealthResponse(
        status="ok",
        version=__version__,
        providers=registry.provider_names(),
        default_provider=registry.default_provider,
        vector_store=store_info,
        sessions=service.sessions_enabled,
    )


# ---------------------------------------------------------------------------
# Embedding
# ---------------------------------------------------------------------------


@router.post("/embed", response_model=EmbedResponse, responses=_ERROR_RESPONSES)
async def embed(
    body: EmbedRequest,
    service: MemoryServiceDep,
    provider: Annotated[str | None, Query()] = None,
) -> EmbedResponse:
    name, vector = await service.embed(body.text, provider)
    return EmbedResponse(provider=name, dimensions=len(vector), embedding=vector)


# ---------------------------------------------------------------------------
# In-process memory
# ---------------------------------------------------------------------------


@router.post("/memory", response_model=IdResponse, status_code=201, responses=_ERROR_RESPONSES)
async def store_memory(body: StoreMemoryRequest, service: MemoryServiceDep) -> IdResponse:
    entry_id = await service.remember(
        body.text,
        metadata=body.metadata,
        session=body.session,
        provider=body.provider,
    )
    return IdResponse(id=entry_id)


@router.post("/memory/search", response_model=SearchResponse, responses=_ERROR_RESPONSES)
async def search_memory(body: SearchMemoryRequest, service: MemoryServiceDep) -> SearchResponse:
    results = await service.recall(
        body.query,
        limit=body.limit,
        session=body.session,
        provider=body.provider,
    )
    return SearchResponse(results=results)


@router.delete("/memory/{entry_id}", status_code=204, responses=_ERROR_RESPONSES)
async def delete_memory(entry_id: str, service: MemoryServiceDep) -> Response:
    service.forget(entry_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Remote vectors
# ---------------------------------------------------------------------------


@router.post("/vectors", response_model=IdResponse, status_code=201, responses=_ERROR_RESPONSES)
async def upsert_vector(
    body: UpsertVectorRequest,
    service: MemoryServiceDep,
    x_api_key: ApiKeyHeader = None,
) -> IdResponse:
    point_id = await service.upsert_vector(
        body.text,
        point_id=body.id,
        metadata=body.metadata,
        session_id=body.session_id,
        provider=body.provider,
        api_key=x_api_key,
    )
    return IdResponse(id=point_id)


@router.post("/vectors/search", response_model=SearchResponse, responses=_ERROR_RESPONSES)
async def search_vectors(body: SearchVectorsRequest, service: MemoryServiceDep) -> SearchResponse:
    results = await service.search_vectors(
        body.query,
        limit=body.limit,
        score_threshold=body.score_threshold,
        session_id=body.session_id,
        provider=body.provider,
    )
    return SearchResponse(results=results)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@router.post("/sessions", response_model=Session, status_code=201, responses=_ERROR_RESPONSES)
async def create_session(
    body: CreateSessionRequest,
    service: MemoryServiceDep,
    x_api_key: ApiKeyHeader = None,
) -> Session:
    return await service.create_session(body.tags, api_key=x_api_key)


@router.get("/sessions", response_model=SessionListResponse, responses=_ERROR_RESPONSES)
async def list_sessions(
    service: MemoryServiceDep,
    limit: Annotated[int, Query(ge=0, le=1000)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> SessionListResponse:
    sessions = await service.list_sessions(limit=limit, offset=offset)
    return SessionListResponse(sessions=sessions)


@router.get("/sessions/{session_id}", response_model=Session, responses=_ERROR_RESPONSES)
async def get_session(session_id: str, service: MemoryServiceDep) -> Session:
    return await service.get_session(session_id)
