"""Tests for resume validation."""

import pytest

from journeylog import JourneyEntry, MissingModules, validate_for_resume


def test_missing_topics_become_empty_lists():
    entry = JourneyEntry(
        id="j1", query="Learn SQL", modules=[{}, {"topics": ["a", "b"]}]
    )
    journey = validate_for_resume(entry)
    assert journey.query == "Learn SQL"
    assert journey.modules == [{"topics": []}, {"topics": ["a", "b"]}]


def test_other_module_fields_pass_through():
    modules = [
        {"title": "Basics", "topics": "not-a-list", "meta": {"level": 1}},
        {"title": "Joins", "topics": [{"name": "inner"}, {"name": "outer"}]},
    ]
    journey = validate_for_resume(JourneyEntry(id="j1", query="q", modules=modules))
    assert journey.modules[0] == {"title": "Basics", "topics": [], "meta": {"level": 1}}
    assert journey.modules[1]["topics"] == [{"name": "inner"}, {"name": "outer"}]


def test_entry_is_not_modified():
    entry = JourneyEntry(id="j1", query="q", modules=[{"title": "t"}])
    validate_for_resume(entry)
    assert entry.modules == [{"title": "t"}]


@pytest.mark.parametrize("modules", [None, "modules", 7, {"0": {}}])
def test_missing_modules_blocks_resume(modules):
    entry = JourneyEntry(id="j1", query="q", modules=modules)
    with pytest.raises(MissingModules) as excinfo:
        validate_for_resume(entry)
    assert excinfo.value.journey_id == "j1"


def test_raw_records_are_accepted():
    journey = validate_for_resume(
        {"id": 3, "query": "Learn Rust", "modules": [{"topics": ("own", "borrow")}, 5]}
    )
    assert journey.id == "3"
    assert journey.modules == [{"topics": ["own", "borrow"]}, {"topics": []}]

    with pytest.raises(MissingModules):
        validate_for_resume({"id": "x", "query": "q"})


def test_empty_module_list_is_resumable():
    journey = validate_for_resume(JourneyEntry(id="j1", query="q", modules=[]))
    assert journey.modules == []
