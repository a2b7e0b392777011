"""Memory entry and search result models.

Defines the Pydantic v2 models that flow between the vector stores and the
HTTP layer.  All models use frozen config: an entry is created once by a
store write and never mutated afterwards.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# A dense vector as returned by an embedding provider.  Its length is
# provider-defined; the remote store additionally requires it to match the
# collection dimension.
Embedding = list[float]


class MemoryEntry(BaseModel):
    """One stored item in the in-process vector store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str
    metadata: dict[str, str] = Field(default_factory=dict)
    # Optional session tag.  Untagged entries never match a session filter.
    session: str | None = None
    embedding: Embedding


class SearchResult(BaseModel):
    """A ranked hit returned by either vector store.

    ``metadata`` never contains the gateway's reserved keys: ``text`` is
    lifted into :attr:`text` and ``session_id`` (when sessions are active)
    into :attr:`session`.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    session: str | None = None
    score: float
