# backend/moodae/insights/streaks.py
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, List, Optional

from moodae.insights.windows import local_day
from moodae.models.mood import MoodEntry
from moodae.models.results import StreakResult


def _entry_days(entries: Iterable[MoodEntry], tz: Optional[tzinfo]) -> List[date]:
    # Several entries on one calendar day count as a single streak day
    return sorted({local_day(e.timestamp, tz) for e in entries})


def current_streak(entries: Iterable[MoodEntry], reference: datetime, tz: Optional[tzinfo] = None) -> int:
    """
    Consecutive calendar days with an entry, counted back from the most recent
    one. The run only counts while it is live: its last day must be the
    reference day or the day before. Days after the reference day are ignored.
    """
    today = local_day(reference, tz)
    days = [d for d in _entry_days(entries, tz) if d <= today]
    if not days or (today - days[-1]).days > 1:
        return 0

    streak = 1
    for newer, older in zip(reversed(days), reversed(days[:-1])):
        if (newer - older).days != 1:
            break
        streak += 1
    return streak


def longest_streak(entries: Iterable[MoodEntry], tz: Optional[tzinfo] = None) -> int:
    days = _entry_days(entries, tz)
    if not days:
        return 0

    longest = run = 1
    for i in range(1, len(days)):
        if days[i] - days[i - 1] == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def streak_summary(entries: Iterable[MoodEntry], reference: datetime, tz: Optional[tzinfo] = None) -> StreakResult:
    entries = list(entries)
    days = _entry_days(entries, tz)
    return StreakResult(
        current=current_streak(entries, reference, tz),
        longest=longest_streak(entries, tz),
        last_entry_day=days[-1] if days else None,
    )
