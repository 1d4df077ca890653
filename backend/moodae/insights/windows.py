# backend/moodae/insights/windows.py
"""
Reporting windows and calendar helpers.

A window is always measured back from an explicit reference instant; nothing
here reads the system clock.
"""
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from moodae.models.mood import MoodEntry


class TimeWindow(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


_WINDOW_DELTAS = {
    TimeWindow.WEEK: relativedelta(weeks=1),
    TimeWindow.MONTH: relativedelta(months=1),
    TimeWindow.YEAR: relativedelta(years=1),
}

# Canonical order, used for tie-breaking and for listing per-weekday stats.
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def window_cutoff(window: TimeWindow, reference: datetime) -> datetime:
    """Calendar-aware start of the window (31 Mar minus a month is 28/29 Feb)."""
    return reference - _WINDOW_DELTAS[TimeWindow(window)]


def filter_entries(entries: Iterable[MoodEntry], window: TimeWindow, reference: datetime) -> List[MoodEntry]:
    """Entries whose timestamp is at or after the window cutoff. Input order is kept."""
    cutoff = window_cutoff(window, reference)
    return [e for e in entries if comparable(e.timestamp, cutoff) >= comparable(cutoff, e.timestamp)]


def comparable(value: datetime, other: datetime) -> datetime:
    """
    Make `value` comparable with `other` when only one of them is tz-aware.
    A naive value is read as wall-clock time in the other value's timezone.
    """
    if value.tzinfo is None and other.tzinfo is not None:
        return value.replace(tzinfo=other.tzinfo)
    return value


def local_day(timestamp: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of a timestamp in the caller's timezone (naive = already local)."""
    if tz is not None and timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tz)
    return timestamp.date()


def local_time(timestamp: datetime, tz: Optional[tzinfo] = None) -> datetime:
    if tz is not None and timestamp.tzinfo is not None:
        return timestamp.astimezone(tz)
    return timestamp


def weekday_name(day: date) -> str:
    # date.weekday(): Monday == 0
    return WEEKDAY_NAMES[(day.weekday() + 1) % 7]


def sorted_by_time(entries: Iterable[MoodEntry], newest_first: bool = False) -> List[MoodEntry]:
    """Chronological copy of the entries; callers never rely on input order."""
    entries = list(entries)
    if not entries:
        return entries
    anchor = next((e.timestamp for e in entries if e.timestamp.tzinfo is not None), entries[0].timestamp)
    return sorted(entries, key=lambda e: comparable(e.timestamp, anchor), reverse=newest_first)
