"""Session registry implementations."""

from vectorgate.providers.session.sqlite_session_store import SQLiteSessionStore

__all__ = ["SQLiteSessionStore"]
