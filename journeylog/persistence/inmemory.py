"""In-memory implementation of the journey backend."""

from __future__ import annotations

import copy
from typing import Any, Dict

from .repository import JourneyBackend


class InMemoryJourneyBackend(JourneyBackend):
    """Store journeys in local memory.

    Useful for tests or when no database is configured. Data is not
    persisted across process restarts.
    """

    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self._records: Dict[str, dict[str, Any]] = {}
        for record in records or []:
            self._records[str(record["id"])] = copy.deepcopy(record)

    async def fetch_all(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(record) for record in self._records.values()]

    async def save(self, record: dict[str, Any]) -> None:
        journey_id = str(record["id"])
        if journey_id in self._records:
            raise ValueError(f"Journey {journey_id} already exists")
        self._records[journey_id] = copy.deepcopy(record)

    async def delete_by_id(self, journey_id: str) -> bool:
        return self._records.pop(journey_id, None) is not None
