"""Persistence backends for journey history."""

from __future__ import annotations

from typing import Optional

from ..config import JourneylogConfig, load_config
from .inmemory import InMemoryJourneyBackend
from .repository import JourneyBackend
from .sqlite import SQLiteJourneyBackend

try:  # pragma: no cover - optional dependency
    from .postgres import PostgresJourneyBackend
except Exception:  # pragma: no cover - optional dependency
    PostgresJourneyBackend = None  # type: ignore

_backend_instance: JourneyBackend | None = None


def backend_from_url(database_url: Optional[str]) -> JourneyBackend:
    """Build the backend a database URL names; no URL means in-memory."""
    if not database_url:
        return InMemoryJourneyBackend()
    scheme, sep, rest = database_url.partition("://")
    if not sep:
        raise ValueError(f"Unsupported database backend: {database_url}")
    if scheme == "sqlite":
        return SQLiteJourneyBackend(rest)
    if scheme in ("postgres", "postgresql"):
        if PostgresJourneyBackend is None:
            raise RuntimeError("Postgres support not available")
        return PostgresJourneyBackend(database_url)
    raise ValueError(f"Unsupported database backend: {database_url}")


def get_backend(
    database_url: Optional[str] = None, config: Optional[JourneylogConfig] = None
) -> JourneyBackend:
    """Return the process-wide journey backend.

    With no arguments the cached backend is reused, or one is built from
    ``load_config()`` (whose ``database_url`` already reflects the
    environment overrides). An explicit ``database_url`` or ``config``
    always builds, and caches, a new backend.
    """

    global _backend_instance
    if _backend_instance is not None and database_url is None and config is None:
        return _backend_instance

    if database_url is None:
        database_url = (config or load_config()).database_url
    _backend_instance = backend_from_url(database_url)
    return _backend_instance


__all__ = [
    "JourneyBackend",
    "InMemoryJourneyBackend",
    "SQLiteJourneyBackend",
    "PostgresJourneyBackend",
    "backend_from_url",
    "get_backend",
]
