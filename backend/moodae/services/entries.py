# backend/moodae/services/entries.py
"""
Where entry lists come from.

The insights engine never touches storage. A source hands over a fully
materialized list of MoodEntry values plus a version token that changes
whenever the underlying entries do (used as a cache key).
"""
import logging
from abc import ABC, abstractmethod
from datetime import timezone
from typing import Dict, Hashable, Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session, sessionmaker

from moodae.core.database import SessionLocal, session_scope
from moodae.models.journal import JournalEntry
from moodae.models.mood import CategorySelection, MoodEntry, parse_mood

logger = logging.getLogger(__name__)


class EntrySource(ABC):
    """Read-only provider of a user's journal entries."""

    @abstractmethod
    def load_entries(self, owner_id: int) -> List[MoodEntry]:
        """Return every entry for the owner, in no particular order."""
        pass

    @abstractmethod
    def version(self, owner_id: int) -> Hashable:
        """Token that changes whenever the owner's entries are added, edited or deleted."""
        pass


class InMemoryEntrySource(EntrySource):
    """Entry lists held in memory, e.g. handed over by an app's own store."""

    def __init__(self):
        self._entries: Dict[int, List[MoodEntry]] = {}
        self._versions: Dict[int, int] = {}

    def replace(self, owner_id: int, entries: Iterable[MoodEntry]):
        """Swap in a new snapshot for the owner and bump its version."""
        self._entries[owner_id] = list(entries)
        self._versions[owner_id] = self._versions.get(owner_id, 0) + 1

    def load_entries(self, owner_id: int) -> List[MoodEntry]:
        return list(self._entries.get(owner_id, []))

    def version(self, owner_id: int) -> Hashable:
        return self._versions.get(owner_id, 0)


class SqlEntrySource(EntrySource):
    """Reads the journal_entries table through SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def load_entries(self, owner_id: int) -> List[MoodEntry]:
        with session_scope(self.session_factory) as db:
            rows = (
                db.query(JournalEntry)
                .filter(JournalEntry.owner_id == owner_id)
                .order_by(JournalEntry.recorded_at)
                .all()
            )
            entries = []
            for row in rows:
                try:
                    entries.append(row_to_entry(row))
                except ValueError as exc:
                    logger.warning("Skipping journal entry %s for owner %s: %s", row.id, owner_id, exc)
            return entries

    def version(self, owner_id: int) -> Hashable:
        with session_scope(self.session_factory) as db:
            return _version_query(db, owner_id)


def _version_query(db: Session, owner_id: int) -> tuple:
    count, revisions, last_update = (
        db.query(
            func.count(JournalEntry.id),
            func.coalesce(func.sum(JournalEntry.revision), 0),
            func.max(JournalEntry.updated_at),
        )
        .filter(JournalEntry.owner_id == owner_id)
        .one()
    )
    return count, int(revisions), str(last_update) if last_update else None


def row_to_entry(row: JournalEntry) -> MoodEntry:
    """Convert a stored row. Raises ValueError on an unknown mood or malformed categories."""
    recorded_at = row.recorded_at
    if recorded_at.tzinfo is None:
        # SQLite drops the offset; rows are written in UTC
        recorded_at = recorded_at.replace(tzinfo=timezone.utc)

    categories = []
    for item in row.categories or []:
        if not isinstance(item, dict):
            raise ValueError(f"malformed category selection {item!r}")
        categories.append(CategorySelection(
            category_name=item.get("category", ""),
            selected_options=tuple(item.get("options") or ()),
        ))

    return MoodEntry(
        id=row.id,
        timestamp=recorded_at,
        mood=parse_mood(row.mood),
        text_entry=row.text_entry or None,
        categories=tuple(categories),
        has_photo=bool(row.has_photo),
        has_audio=bool(row.has_audio),
    )
