"""PostgreSQL implementation of the journey backend."""

from __future__ import annotations

import json
from typing import Any

import asyncpg

from .repository import JourneyBackend


def _dumps(value: Any) -> str | None:
    return None if value is None else json.dumps(value)


def _loads(value: Any) -> Any:
    if isinstance(value, str):
        return json.loads(value)
    return value


class PostgresJourneyBackend(JourneyBackend):
    """Persist journeys using PostgreSQL."""

    def __init__(self, dsn: str):
        self._dsn = dsn
        self._initialized = False

    async def _connect(self) -> asyncpg.Connection:
        conn = await asyncpg.connect(self._dsn)
        if not self._initialized:
            await self._ensure_schema(conn)
            self._initialized = True
        return conn

    async def _ensure_schema(self, conn: asyncpg.Connection) -> None:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS journeys (
                seq SERIAL,
                id TEXT PRIMARY KEY,
                query TEXT NOT NULL,
                created_at TEXT,
                modules JSONB,
                progress INTEGER,
                module_progress JSONB
            )
            """
        )

    # ------------------------------------------------------------------
    async def fetch_all(self) -> list[dict[str, Any]]:
        conn = await self._connect()
        try:
            rows = await conn.fetch(
                "SELECT id, query, created_at, modules, progress, module_progress FROM journeys ORDER BY seq"
            )
        finally:
            await conn.close()
        return [
            {
                "id": r["id"],
                "query": r["query"],
                "createdAt": r["created_at"],
                "modules": _loads(r["modules"]),
                "progress": r["progress"],
                "moduleProgress": _loads(r["module_progress"]),
            }
            for r in rows
        ]

    async def save(self, record: dict[str, Any]) -> None:
        conn = await self._connect()
        try:
            await conn.execute(
                "INSERT INTO journeys (id, query, created_at, modules, progress, module_progress) VALUES ($1, $2, $3, $4, $5, $6)",
                str(record["id"]),
                record["query"],
                record.get("createdAt"),
                _dumps(record.get("modules")),
                record.get("progress"),
                _dumps(record.get("moduleProgress")),
            )
        finally:
            await conn.close()

    async def delete_by_id(self, journey_id: str) -> bool:
        conn = await self._connect()
        try:
            status = await conn.execute(
                "DELETE FROM journeys WHERE id = $1", journey_id
            )
        finally:
            await conn.close()
        # asyncpg returns the command tag, e.g. "DELETE 1"
        return status.split()[-1] != "0"
