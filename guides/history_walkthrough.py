"""Walk through saving, listing, resuming and deleting journeys.

Run with ``python guides/history_walkthrough.py``. Uses a throwaway SQLite
database in the current directory.
"""

import asyncio
import logging

from journeylog import HistoryService, MissingModules
from journeylog.persistence import SQLiteJourneyBackend

logging.basicConfig(level=logging.INFO)


async def main() -> None:
    service = HistoryService(backend=SQLiteJourneyBackend("walkthrough.db"))
    await service.load_history()

    journey = await service.start_journey(
        "Learn distributed systems",
        modules=[
            {"title": "Consensus", "topics": ["raft", "paxos"]},
            {"title": "Replication"},
        ],
    )
    legacy = await service.start_journey("Old journey", modules=None, progress=60)

    for entry in service.open_history().entries:
        print(f"{entry.query}: {service.progress_of(entry)}%")

    resumed = service.continue_journey(journey.id)
    print("Resuming with modules:", resumed.modules)

    try:
        service.continue_journey(legacy.id)
    except MissingModules as exc:
        print(exc)

    await service.delete_journey(journey.id)
    await service.delete_journey(legacy.id)
    print("Remaining journeys:", len(service.open_history().entries))


if __name__ == "__main__":
    asyncio.run(main())
