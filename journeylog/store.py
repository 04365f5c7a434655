"""Cached, backend-synchronised list of journey entries."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from .errors import (
    AlreadyInProgress,
    DeletionFailed,
    EntryNotFound,
    FetchFailed,
    MalformedRecord,
    SaveFailed,
)
from .models import JourneyEntry
from .persistence import JourneyBackend, get_backend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistorySnapshot:
    """Read-only view of the store at one point in time."""

    entries: tuple[JourneyEntry, ...] = ()
    loading: bool = False
    error: Optional[FetchFailed] = None


Listener = Callable[[HistorySnapshot], None]


class JourneyStore:
    """Owns the cached journey list and mediates every change to it.

    The persistence backend holds the canonical records. Mutations go to the
    backend first and are applied to the cache only once the backend call
    succeeds, under a lock, so readers always see a list produced by a
    sequence of completed operations.
    """

    def __init__(self, backend: JourneyBackend | None = None) -> None:
        self._backend = backend or get_backend()
        self._entries: list[JourneyEntry] = []
        self._loading = False
        self._error: FetchFailed | None = None
        self._lock = asyncio.Lock()
        self._fetch_task: asyncio.Task | None = None
        self._pending_deletes: set[str] = set()
        # ids removed while a fetch is outstanding; the fetch result may still hold them
        self._deleted_during_fetch: set[str] = set()
        # entries saved while a fetch is outstanding; the fetch result may predate them
        self._created_during_fetch: dict[str, JourneyEntry] = {}
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Reading
    def snapshot(self) -> HistorySnapshot:
        return HistorySnapshot(
            entries=tuple(self._entries), loading=self._loading, error=self._error
        )

    def list(self) -> HistorySnapshot:
        """Return the current snapshot, starting the initial fetch on first use.

        Must be called from a running event loop. While the first fetch is
        outstanding the snapshot reports ``loading=True`` and the prior list.
        """
        if self._fetch_task is None:
            self._loading = True
            self._fetch_task = asyncio.get_running_loop().create_task(self.refresh())
        return self.snapshot()

    async def wait_loaded(self) -> HistorySnapshot:
        """Wait for the initial fetch (starting it if needed)."""
        self.list()
        assert self._fetch_task is not None
        await self._fetch_task
        return self.snapshot()

    def get(self, journey_id: str) -> JourneyEntry:
        for entry in self._entries:
            if entry.id == journey_id:
                return entry
        raise EntryNotFound(journey_id)

    async def refresh(self) -> HistorySnapshot:
        """Reload the cache from the backend.

        A failed fetch leaves the cached list as it was and records a
        ``FetchFailed`` in the snapshot rather than raising.
        """
        self._loading = True
        self._deleted_during_fetch.clear()
        self._created_during_fetch.clear()
        try:
            records = await self._backend.fetch_all()
        except Exception as exc:
            logger.warning(f"Failed to load journeys: {exc}")
            error = FetchFailed(f"Failed to load journeys: {exc}")
            error.__cause__ = exc
            async with self._lock:
                self._error = error
                self._loading = False
            self._notify()
            return self.snapshot()

        entries = self._ingest(records)
        async with self._lock:
            fetched_ids = {entry.id for entry in entries}
            entries.extend(
                entry
                for entry_id, entry in self._created_during_fetch.items()
                if entry_id not in fetched_ids
            )
            self._entries = [
                entry for entry in entries if entry.id not in self._deleted_during_fetch
            ]
            self._deleted_during_fetch.clear()
            self._created_during_fetch.clear()
            self._error = None
            self._loading = False
        logger.debug(f"Loaded {len(self._entries)} journeys")
        self._notify()
        return self.snapshot()

    def _ingest(self, records: Iterable[Any]) -> list[JourneyEntry]:
        entries: list[JourneyEntry] = []
        seen: set[str] = set()
        for record in records:
            try:
                entry = JourneyEntry.from_record(record)
            except MalformedRecord as exc:
                logger.warning(f"Skipping malformed journey record: {exc}")
                continue
            if entry.id in seen:
                logger.warning(f"Skipping duplicate journey record {entry.id}")
                continue
            seen.add(entry.id)
            entries.append(entry)
        return entries

    # ------------------------------------------------------------------
    # Mutations
    async def create(self, entry: JourneyEntry) -> JourneyEntry:
        """Persist ``entry`` and append it to the cache."""
        try:
            await self._backend.save(entry.to_record())
        except Exception as exc:
            logger.warning(f"Backend failed to save journey {entry.id}: {exc}")
            raise SaveFailed(entry.id, str(exc)) from exc

        async with self._lock:
            self._entries.append(entry)
            if self._loading:
                self._created_during_fetch[entry.id] = entry
        logger.info(f"Saved journey {entry.id}")
        self._notify()
        return entry

    async def delete(self, journey_id: str) -> None:
        """Delete a journey from the backend, then from the cache.

        Raises ``AlreadyInProgress`` if a deletion for ``journey_id`` is still
        pending and ``DeletionFailed`` if the backend errors or does not know
        the id. The cache is untouched on failure.
        """
        if journey_id in self._pending_deletes:
            raise AlreadyInProgress(journey_id)
        self._pending_deletes.add(journey_id)
        try:
            try:
                deleted = await self._backend.delete_by_id(journey_id)
            except Exception as exc:
                logger.warning(f"Backend failed to delete journey {journey_id}: {exc}")
                raise DeletionFailed(journey_id, str(exc)) from exc
            if not deleted:
                raise DeletionFailed(journey_id, "not found")

            async with self._lock:
                self._entries = [e for e in self._entries if e.id != journey_id]
                if self._loading:
                    self._deleted_during_fetch.add(journey_id)
                    self._created_during_fetch.pop(journey_id, None)
        finally:
            self._pending_deletes.discard(journey_id)

        logger.info(f"Deleted journey {journey_id}")
        self._notify()

    def is_deleting(self, journey_id: str) -> bool:
        return journey_id in self._pending_deletes

    # ------------------------------------------------------------------
    # Subscribers
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Journey history listener {listener!r} failed")


__all__ = ["HistorySnapshot", "JourneyStore", "Listener"]
