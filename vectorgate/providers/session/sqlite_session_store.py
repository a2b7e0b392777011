"""SQLite-backed session registry.

Persists sessions to a local SQLite file using ``aiosqlite`` for async
I/O.  Tags are stored as a JSON array in a TEXT column; timestamps are
RFC 3339 UTC strings so ``ORDER BY created_at DESC`` sorts newest first.
"""

from __future__ import annotations

import json
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from vectorgate.interfaces.session_store import ISessionStore
from vectorgate.models.session import Session
from vectorgate.utils.errors import SessionStoreError
from vectorgate.utils.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_DB_PATH = Path("data/sessions.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS sessions (
    id          TEXT PRIMARY KEY,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL,
    tags        TEXT NOT NULL DEFAULT '[]'
);
"""

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_sessions_created_at ON sessions(created_at DESC);",
]

_INSERT_SQL = "INSERT INTO sessions (id, created_at, updated_at, tags) VALUES (?, ?, ?, ?);"

_SELECT_ONE_SQL = "SELECT id, created_at, updated_at, tags FROM sessions WHERE id = ?;"

# SQLite treats a negative LIMIT as "no limit".
_SELECT_PAGE_SQL = """\
SELECT id, created_at, updated_at, tags
FROM sessions
ORDER BY created_at DESC
LIMIT ? OFFSET ?;
"""

_TOUCH_SQL = "UPDATE sessions SET updated_at = ? WHERE id = ?;"


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")  # noqa: UP017


def _row_to_session(row: aiosqlite.Row) -> Session:
    try:
        tags = json.loads(row["tags"] or "[]")
    except json.JSONDecodeError:
        logger.warning("session_tags_unreadable", session_id=row["id"])
        tags = []
    return Session(
        id=row["id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
    )


class SQLiteSessionStore(ISessionStore):
    """SQLite-backed session persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    async def initialize(self) -> None:
        """Create the sessions table and index if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_CREATE_TABLE_SQL)
                for idx_sql in _CREATE_INDICES_SQL:
                    await db.execute(idx_sql)
                await db.commit()
        except sqlite3.Error as exc:
            raise SessionStoreError(f"Failed to initialise session database: {exc}") from exc
        logger.info("session_db_initialized", path=str(self._db_path))

    async def create(self, tags: list[str] | None = None) -> Session:
        now = _utc_now()
        session = Session(id=str(uuid.uuid4()), created_at=now, updated_at=now, tags=list(tags or []))
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(
                    _INSERT_SQL,
                    (session.id, session.created_at, session.updated_at, json.dumps(session.tags)),
                )
                await db.commit()
        except sqlite3.Error as exc:
            raise SessionStoreError(f"Failed to create session: {exc}") from exc

        logger.info("session_created", session_id=session.id, tags=session.tags)
        return session

    async def get(self, session_id: str) -> Session | None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(_SELECT_ONE_SQL, (session_id,))
                row = await cursor.fetchone()
        except sqlite3.Error as exc:
            raise SessionStoreError(f"Failed to load session {session_id}: {exc}") from exc
        return _row_to_session(row) if row is not None else None

    async def list(self, limit: int = 50, offset: int = 0) -> list[Session]:
        """Return sessions newest first; ``limit=0`` returns every row."""
        sql_limit = limit if limit > 0 else -1
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(_SELECT_PAGE_SQL, (sql_limit, max(offset, 0)))
                rows = await cursor.fetchall()
        except sqlite3.Error as exc:
            raise SessionStoreError(f"Failed to list sessions: {exc}") from exc
        return [_row_to_session(row) for row in rows]

    async def touch(self, session_id: str) -> None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_TOUCH_SQL, (_utc_now(), session_id))
                await db.commit()
        except sqlite3.Error as exc:
            logger.warning("session_touch_failed", session_id=session_id, error=str(exc))
