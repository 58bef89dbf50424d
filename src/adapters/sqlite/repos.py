import asyncio
import sqlite3
from datetime import UTC, datetime
from typing import Any

SCHEMA = """
CREATE TABLE IF NOT EXISTS theme_preferences (
    viewer_id TEXT PRIMARY KEY,
    theme_name TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLitePreferenceRepo:
    """Synchronous theme preference table access."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    def ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(SCHEMA)
            conn.commit()
        finally:
            conn.close()

    def get(self, viewer_id: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT theme_name FROM theme_preferences WHERE viewer_id = ?", (viewer_id,)
            ).fetchone()
            return row["theme_name"] if row else None
        finally:
            conn.close()

    def save(self, viewer_id: str, theme_name: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO theme_preferences (viewer_id, theme_name, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(viewer_id) DO UPDATE SET
                    theme_name=excluded.theme_name,
                    updated_at=excluded.updated_at
            """,
                (viewer_id, theme_name, datetime.now(UTC).isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, viewer_id: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM theme_preferences WHERE viewer_id = ?", (viewer_id,))
            conn.commit()
        finally:
            conn.close()


class SQLitePreferenceStore:
    """PreferenceStorePort over SQLitePreferenceRepo; queries run in a worker thread."""

    def __init__(self, db_path: str):
        self.repo = SQLitePreferenceRepo(db_path)
        self.repo.ensure_schema()

    async def get_theme_name(self, viewer_id: str) -> str | None:
        return await asyncio.to_thread(self.repo.get, viewer_id)

    async def set_theme_name(self, viewer_id: str, theme_name: str) -> None:
        await asyncio.to_thread(self.repo.save, viewer_id, theme_name)

    async def clear(self, viewer_id: str) -> None:
        await asyncio.to_thread(self.repo.delete, viewer_id)
