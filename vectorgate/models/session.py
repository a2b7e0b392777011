"""Session model for the optional SQLite session registry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """A caller-created grouping for session-linked vector writes.

    Timestamps are RFC 3339 strings in UTC, stored as text in SQLite so
    that lexical ordering matches chronological ordering.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: str
    updated_at: str
    tags: list[str] = Field(default_factory=list)
