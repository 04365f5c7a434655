"""Backend abstraction for journey persistence."""

from __future__ import annotations

from typing import Any, Protocol


class JourneyBackend(Protocol):
    """Protocol for journey persistence backends.

    Backends deal in plain records (the camelCase mapping produced by
    ``JourneyEntry.to_record``); validation happens in the store.
    """

    async def fetch_all(self) -> list[dict[str, Any]]:
        """Return every persisted journey record, oldest first."""

    async def save(self, record: dict[str, Any]) -> None:
        """Persist a new journey record."""

    async def delete_by_id(self, journey_id: str) -> bool:
        """Delete a journey, returning ``False`` if the id is unknown."""
