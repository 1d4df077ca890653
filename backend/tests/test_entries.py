# backend/tests/test_entries.py
import logging
import uuid
from datetime import datetime, timezone

import pytest

from moodae.core.database import session_scope
from moodae.insights.cache import InsightCache
from moodae.insights.windows import TimeWindow
from moodae.models.journal import JournalEntry
from moodae.models.mood import MoodType
from moodae.services.entries import InMemoryEntrySource, SqlEntrySource, row_to_entry
from moodae.services.insights import InsightsService


def _row(owner_id=1, mood="good", at=None, categories=None, **extra):
    return JournalEntry(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        recorded_at=at or datetime(2025, 7, 20, 9, 30, tzinfo=timezone.utc),
        mood=mood,
        categories=categories,
        **extra,
    )


def test_load_entries_converts_rows(session_factory):
    with session_scope(session_factory) as db:
        db.add(_row(mood="amazing", categories=[{"category": "People", "options": ["friends", "family"]}],
                    text_entry="Lunch with friends", has_photo=True))
        db.add(_row(owner_id=2, mood="tough"))

    (entry,) = SqlEntrySource(session_factory).load_entries(1)
    assert entry.mood is MoodType.AMAZING
    assert entry.timestamp == datetime(2025, 7, 20, 9, 30, tzinfo=timezone.utc)
    assert entry.timestamp.tzinfo is not None
    assert entry.option_names == ["friends", "family"]
    assert entry.categories[0].category_name == "People"
    assert entry.text_entry == "Lunch with friends"
    assert entry.has_photo and not entry.has_audio


def test_unknown_owner_has_no_entries(session_factory):
    assert SqlEntrySource(session_factory).load_entries(42) == []


def test_bad_rows_are_skipped_with_a_warning(session_factory, caplog):
    with session_scope(session_factory) as db:
        db.add(_row(mood="good"))
        db.add(_row(mood="ecstatic"))

    with caplog.at_level(logging.WARNING, logger="moodae.services.entries"):
        entries = SqlEntrySource(session_factory).load_entries(1)

    assert [e.mood for e in entries] == [MoodType.GOOD]
    assert "Skipping journal entry" in caplog.text


def test_version_changes_when_entries_change(session_factory):
    source = SqlEntrySource(session_factory)
    empty = source.version(1)
    assert empty == (0, 0, None)

    row = _row()
    with session_scope(session_factory) as db:
        db.add(row)
    after_insert = source.version(1)
    assert after_insert != empty
    assert source.version(1) == after_insert

    with session_scope(session_factory) as db:
        db.query(JournalEntry).filter(JournalEntry.owner_id == 1).delete()
    assert source.version(1) != after_insert


def test_row_with_malformed_categories():
    with pytest.raises(ValueError, match="malformed category"):
        row_to_entry(_row(categories=["friends"]))


def test_in_memory_source(make_entry):
    source = InMemoryEntrySource()
    assert source.version(1) == 0
    assert source.load_entries(1) == []

    entries = [make_entry("good"), make_entry("tough", days_ago=1)]
    source.replace(1, entries)
    assert source.version(1) == 1
    assert source.load_entries(1) == entries

    source.replace(1, entries[:1])
    assert source.version(1) == 2
    assert source.version(2) == 0


def test_editing_a_row_changes_version_and_report(session_factory, reference):
    source = SqlEntrySource(session_factory)
    service = InsightsService(source=source, cache=InsightCache(max_size=8), tz=timezone.utc)
    row = _row(mood="good", at=reference)
    row_id = row.id
    with session_scope(session_factory) as db:
        db.add(row)

    before_version = source.version(1)
    before = service.build_report(1, TimeWindow.WEEK, reference)
    assert before.polarity_counts.positive == 1

    with session_scope(session_factory) as db:
        stored = db.get(JournalEntry, row_id)
        stored.mood = "tough"

    assert source.version(1) != before_version
    after = service.build_report(1, TimeWindow.WEEK, reference)
    assert after.polarity_counts.difficult == 1
    assert after.polarity_counts.positive == 0


def test_revision_starts_at_one_and_counts_updates(session_factory):
    row = _row()
    row_id = row.id
    with session_scope(session_factory) as db:
        db.add(row)
    with session_scope(session_factory) as db:
        stored = db.get(JournalEntry, row_id)
        assert stored.revision == 1
        stored.text_entry = "rewritten"
    with session_scope(session_factory) as db:
        assert db.get(JournalEntry, row_id).revision == 2
