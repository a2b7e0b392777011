"""Unit tests for SQLiteSessionStore.

Each test gets its own database file under pytest's ``tmp_path``.
"""

from __future__ import annotations

import uuid
from unittest.mock import patch

import aiosqlite
import pytest

from vectorgate.providers.session.sqlite_session_store import SQLiteSessionStore

_NOW = "vectorgate.providers.session.sqlite_session_store._utc_now"


@pytest.fixture
async def store(tmp_path) -> SQLiteSessionStore:
    s = SQLiteSessionStore(db_path=tmp_path / "nested" / "sessions.db")
    await s.initialize()
    return s


# ─── Initialization ───────────────────────────────────────────────


class TestInitialize:
    @pytest.mark.asyncio
    async def test_creates_table_and_index(self, store: SQLiteSessionStore) -> None:
        async with aiosqlite.connect(str(store.db_path)) as db:
            cursor = await db.execute("SELECT name FROM sqlite_master WHERE type IN ('table', 'index')")
            names = {row[0] for row in await cursor.fetchall()}
        assert "sessions" in names
        assert "idx_sessions_created_at" in names

    @pytest.mark.asyncio
    async def test_is_idempotent(self, store: SQLiteSessionStore) -> None:
        await store.initialize()
        assert await store.list() == []


# ─── Create / get ─────────────────────────────────────────────────


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_create_generates_id_and_timestamps(self, store: SQLiteSessionStore) -> None:
        session = await store.create()

        uuid.UUID(session.id)
        assert session.created_at == session.updated_at
        assert session.created_at.endswith("Z")
        assert session.tags == []

    @pytest.mark.asyncio
    async def test_create_stores_tags(self, store: SQLiteSessionStore) -> None:
        created = await store.create(["agent", "research"])
        loaded = await store.get(created.id)

        assert loaded is not None
        assert loaded.tags == ["agent", "research"]

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, store: SQLiteSessionStore) -> None:
        assert await store.get("missing") is None


# ─── List ─────────────────────────────────────────────────────────


class TestList:
    @pytest.fixture
    async def three(self, store: SQLiteSessionStore) -> list[str]:
        stamps = [
            "2026-01-01T00:00:00.000000Z",
            "2026-01-02T00:00:00.000000Z",
            "2026-01-03T00:00:00.000000Z",
        ]
        ids = []
        for stamp in stamps:
            with patch(_NOW, return_value=stamp):
                ids.append((await store.create([stamp[:10]])).id)
        return ids

    @pytest.mark.asyncio
    async def test_newest_first(self, store: SQLiteSessionStore, three: list[str]) -> None:
        sessions = await store.list()
        assert [s.id for s in sessions] == list(reversed(three))

    @pytest.mark.asyncio
    async def test_limit_and_offset(self, store: SQLiteSessionStore, three: list[str]) -> None:
        page = await store.list(limit=1, offset=1)
        assert [s.id for s in page] == [three[1]]

    @pytest.mark.asyncio
    async def test_zero_limit_is_unbounded(self, store: SQLiteSessionStore, three: list[str]) -> None:
        assert len(await store.list(limit=0)) == 3

    @pytest.mark.asyncio
    async def test_offset_past_end(self, store: SQLiteSessionStore, three: list[str]) -> None:
        assert await store.list(limit=10, offset=10) == []


# ─── Touch ────────────────────────────────────────────────────────


class TestTouch:
    @pytest.mark.asyncio
    async def test_bumps_updated_at(self, store: SQLiteSessionStore) -> None:
        with patch(_NOW, return_value="2026-01-01T00:00:00.000000Z"):
            session = await store.create()
        with patch(_NOW, return_value="2026-02-01T00:00:00.000000Z"):
            await store.touch(session.id)

        loaded = await store.get(session.id)
        assert loaded is not None
        assert loaded.created_at == "2026-01-01T00:00:00.000000Z"
        assert loaded.updated_at == "2026-02-01T00:00:00.000000Z"

    @pytest.mark.asyncio
    async def test_unknown_id_is_a_no_op(self, store: SQLiteSessionStore) -> None:
        await store.touch("missing")

    @pytest.mark.asyncio
    async def test_failures_are_swallowed(self, tmp_path) -> None:
        # Table never created: the UPDATE fails inside SQLite.
        s = SQLiteSessionStore(db_path=tmp_path / "uninitialised.db")
        await s.touch("anything")
