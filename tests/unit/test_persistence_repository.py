import sqlite3

import pytest

from journeylog import JourneyEntry
from journeylog.persistence import InMemoryJourneyBackend, SQLiteJourneyBackend


@pytest.mark.asyncio
async def test_sqlite_backend_crud(tmp_path):
    backend = SQLiteJourneyBackend(tmp_path / "journeys.db")

    first = JourneyEntry.new("Learn Go", modules=[{"title": "Basics", "topics": ["syntax"]}])
    second = JourneyEntry(
        id="legacy", query="Learn SQL", progress=40, moduleProgress={"0": 10, "1": 70}
    )
    await backend.save(first.to_record())
    await backend.save(second.to_record())

    records = await backend.fetch_all()
    assert [r["id"] for r in records] == [first.id, "legacy"]
    assert JourneyEntry.from_record(records[0]) == first
    assert records[1]["modules"] is None
    assert records[1]["createdAt"] is None
    assert records[1]["moduleProgress"] == {"0": 10, "1": 70}

    assert await backend.delete_by_id(first.id) is True
    assert await backend.delete_by_id(first.id) is False
    assert [r["id"] for r in await backend.fetch_all()] == ["legacy"]


@pytest.mark.asyncio
async def test_sqlite_backend_persists_across_instances(tmp_path):
    db_path = tmp_path / "journeys.db"
    entry = JourneyEntry.new("Learn Rust")
    backend = SQLiteJourneyBackend(db_path)
    await backend.save(entry.to_record())
    backend.close()

    reopened = SQLiteJourneyBackend(db_path)
    records = await reopened.fetch_all()
    assert [r["id"] for r in records] == [entry.id]


@pytest.mark.asyncio
async def test_sqlite_backend_rejects_duplicate_ids(tmp_path):
    backend = SQLiteJourneyBackend(tmp_path / "journeys.db")
    record = JourneyEntry(id="same", query="q").to_record()
    await backend.save(record)
    with pytest.raises(sqlite3.IntegrityError):
        await backend.save(record)


@pytest.mark.asyncio
async def test_inmemory_backend_returns_copies():
    backend = InMemoryJourneyBackend([{"id": "a", "query": "q", "modules": [{"topics": []}]}])
    records = await backend.fetch_all()
    records[0]["modules"].append({"topics": ["x"]})

    again = await backend.fetch_all()
    assert again[0]["modules"] == [{"topics": []}]
    assert await backend.delete_by_id("a") is True
    assert await backend.fetch_all() == []
