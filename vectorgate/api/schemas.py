"""Pydantic request/response schemas for the vectorgate HTTP API.

Request schemas end with ``Request``, response schemas with ``Response``.
FastAPI validates incoming JSON against them (malformed bodies get a 422)
and uses them to serialise responses and generate the OpenAPI docs.
Semantic checks that need configuration (reserved metadata keys, provider
names, auth) happen in the service layer instead.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from vectorgate.models.memory import SearchResult
from vectorgate.models.session import Session

# ---------------------------------------------------------------------------
# Embedding
# ---------------------------------------------------------------------------


class EmbedRequest(BaseModel):
    text: str


class EmbedResponse(BaseModel):
    provider: str
    dimensions: int
    embedding: list[float]


# ---------------------------------------------------------------------------
# In-process memory
# ---------------------------------------------------------------------------


class StoreMemoryRequest(BaseModel):
    """Text to embed and keep in the in-process store."""

    text: str
    metadata: dict[str, str] = Field(default_factory=dict)
    session: str | None = None
    provider: str | None = None


class SearchMemoryRequest(BaseModel):
    query: str
    limit: int = Field(default=5, ge=1, le=100)
    session: str | None = None
    provider: str | None = None


# ---------------------------------------------------------------------------
# Remote vectors
# ---------------------------------------------------------------------------


class UpsertVectorRequest(BaseModel):
    """Text to embed and upsert into the Qdrant collection.

    ``id`` must be a UUID when given; one is generated otherwise.
    Setting ``session_id`` requires the ``X-API-Key`` header.
    """

    text: str
    id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    session_id: str | None = None
    provider: str | None = None


class SearchVectorsRequest(BaseModel):
    query: str
    limit: int = Field(default=5, ge=1, le=100)
    score_threshold: float | None = None
    session_id: str | None = None
    provider: str | None = None


# ---------------------------------------------------------------------------
# Shared results
# ---------------------------------------------------------------------------


class IdResponse(BaseModel):
    id: str


class SearchResponse(BaseModel):
    results: list[SearchResult] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class CreateSessionRequest(BaseModel):
    tags: list[str] = Field(default_factory=list)


class SessionListResponse(BaseModel):
    sessions: list[Session] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Health / errors
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: list[str]
    default_provider: str
    vector_store: dict[str, Any]
    sessions: bool


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
