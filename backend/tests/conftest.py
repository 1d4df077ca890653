# backend/tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from moodae.core.database import Base
from moodae.models import journal  # noqa: F401  (registers the table on Base.metadata)
from moodae.models.mood import CategorySelection, MoodEntry, MoodType

# Sunday 20 July 2025, noon UTC
REFERENCE = datetime(2025, 7, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def reference() -> datetime:
    return REFERENCE


@pytest.fixture
def make_entry():
    """
    Build a MoodEntry relative to REFERENCE.
    options: {"People": ["friends"], ...} or a flat list (filed under "Emotions").
    """
    def _make(mood, days_ago: float = 0, hours: float = 0, options=None, at: datetime | None = None):
        if isinstance(options, (list, tuple)):
            options = {"Emotions": list(options)}
        categories = tuple(
            CategorySelection(category_name=name, selected_options=tuple(opts))
            for name, opts in (options or {}).items()
        )
        timestamp = at or REFERENCE - timedelta(days=days_ago) + timedelta(hours=hours)
        return MoodEntry(timestamp=timestamp, mood=MoodType(mood), categories=categories)

    return _make


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(engine)
    engine.dispose()
