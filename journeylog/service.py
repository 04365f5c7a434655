"""Entry points the presentation layer uses to work with journey history."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .models import JourneyEntry
from .persistence import JourneyBackend
from .progress import aggregate, per_module_breakdown
from .resume import NormalizedJourney, validate_for_resume
from .store import HistorySnapshot, JourneyStore

logger = logging.getLogger(__name__)


class HistoryService:
    """Facade over a ``JourneyStore`` for a history view.

    Failures surface as the typed exceptions in ``journeylog.errors``; the
    caller decides how to tell the user.
    """

    def __init__(
        self,
        store: JourneyStore | None = None,
        backend: JourneyBackend | None = None,
    ) -> None:
        self.store = store or JourneyStore(backend)

    def open_history(self) -> HistorySnapshot:
        return self.store.list()

    async def load_history(self) -> HistorySnapshot:
        return await self.store.wait_loaded()

    async def start_journey(
        self,
        query: str,
        modules: Optional[list[dict[str, Any]]] = None,
        progress: Optional[int] = None,
    ) -> JourneyEntry:
        entry = JourneyEntry.new(query, modules=modules, progress=progress)
        return await self.store.create(entry)

    def continue_journey(self, entry: Union[JourneyEntry, str]) -> NormalizedJourney:
        """Validate a journey for resumption; accepts an entry or its id."""
        if isinstance(entry, str):
            entry = self.store.get(entry)
        journey = validate_for_resume(entry)
        logger.debug(
            f"Continuing journey {entry.id} with {len(journey.modules)} modules"
        )
        return journey

    async def delete_journey(self, journey_id: str) -> None:
        await self.store.delete(journey_id)

    @staticmethod
    def progress_of(entry: JourneyEntry) -> int:
        return aggregate(entry)

    @staticmethod
    def breakdown_of(entry: JourneyEntry) -> list[tuple[int, int]]:
        return per_module_breakdown(entry)


__all__ = ["HistoryService"]
