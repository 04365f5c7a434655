"""SQLite implementation of the journey backend."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from pathlib import Path
from typing import Any

from .repository import JourneyBackend


def _dumps(value: Any) -> str | None:
    return None if value is None else json.dumps(value)


def _loads(value: str | None) -> Any:
    return json.loads(value) if value else None


class SQLiteJourneyBackend(JourneyBackend):
    """Persist journeys using SQLite."""

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._ensure_schema()

    # ------------------------------------------------------------------
    # Schema management
    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS journeys (
                id TEXT PRIMARY KEY,
                query TEXT NOT NULL,
                created_at TEXT,
                modules TEXT,
                progress INTEGER,
                module_progress TEXT
            )
            """
        )
        self._conn.commit()

    # ------------------------------------------------------------------
    # Helper methods
    def _execute(self, query: str, *params: Any) -> int:
        cur = self._conn.cursor()
        cur.execute(query, params)
        self._conn.commit()
        return cur.rowcount

    def _fetchall(self, query: str, *params: Any) -> list[sqlite3.Row]:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchall()

    def close(self) -> None:
        self._conn.close()

    # ------------------------------------------------------------------
    # Backend API
    async def fetch_all(self) -> list[dict[str, Any]]:
        rows = await asyncio.to_thread(
            self._fetchall,
            "SELECT id, query, created_at, modules, progress, module_progress FROM journeys ORDER BY rowid",
        )
        return [
            {
                "id": row["id"],
                "query": row["query"],
                "createdAt": row["created_at"],
                "modules": _loads(row["modules"]),
                "progress": row["progress"],
                "moduleProgress": _loads(row["module_progress"]),
            }
            for row in rows
        ]

    async def save(self, record: dict[str, Any]) -> None:
        await asyncio.to_thread(
            self._execute,
            "INSERT INTO journeys (id, query, created_at, modules, progress, module_progress) VALUES (?, ?, ?, ?, ?, ?)",
            str(record["id"]),
            record["query"],
            record.get("createdAt"),
            _dumps(record.get("modules")),
            record.get("progress"),
            _dumps(record.get("moduleProgress")),
        )

    async def delete_by_id(self, journey_id: str) -> bool:
        deleted = await asyncio.to_thread(
            self._execute, "DELETE FROM journeys WHERE id = ?", journey_id
        )
        return deleted > 0
