# backend/moodae/insights/review.py
"""
Longer-range summaries: year in review, weekly summaries and the
chronological mood series behind the flow graph.
"""
import calendar
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Dict, Iterable, List, Optional

from moodae.insights.aggregation import (
    average_mood_score,
    mood_distribution,
    percentage_by_polarity,
)
from moodae.insights.streaks import longest_streak
from moodae.insights.windows import TimeWindow, filter_entries, local_day, sorted_by_time
from moodae.models.mood import MoodEntry, MoodType
from moodae.models.results import MoodPoint, WeekSummary, YearReview

POSITIVE_YEAR_AVERAGE = 3.5
CONSISTENT_YEAR_ENTRIES = 100


class WeekStart(str, Enum):
    SUNDAY = "sunday"
    MONDAY = "monday"

    def start_of_week(self, day: date) -> date:
        # date.weekday(): Monday == 0
        offset = day.weekday() if self is WeekStart.MONDAY else (day.weekday() + 1) % 7
        return day - timedelta(days=offset)


# ── Year in review ────────────────────────────────────────────────────────────

def year_entries(entries: Iterable[MoodEntry], year: int, tz: Optional[tzinfo] = None) -> List[MoodEntry]:
    return [e for e in entries if local_day(e.timestamp, tz).year == year]


def _months(entries: List[MoodEntry], tz: Optional[tzinfo]) -> Dict[int, List[float]]:
    months: Dict[int, List[float]] = {}
    for entry in entries:
        months.setdefault(local_day(entry.timestamp, tz).month, []).append(entry.value_score)
    return months


def year_in_review(entries: Iterable[MoodEntry], year: int, tz: Optional[tzinfo] = None) -> YearReview:
    selected = year_entries(entries, year, tz)
    months = _months(selected, tz)
    average = average_mood_score(selected)

    # max() keeps the first maximum, so ties go to the earlier month
    best_month = max(sorted(months), key=lambda m: sum(months[m]) / len(months[m]), default=None)
    most_active = max(sorted(months), key=lambda m: len(months[m]), default=None)

    insights = []
    if most_active is not None:
        insights.append(
            f"You were most active in {calendar.month_name[most_active]} "
            f"with {len(months[most_active])} entries"
        )
    if average is not None and average >= POSITIVE_YEAR_AVERAGE:
        insights.append(f"This was a positive year with an average mood of {average:.1f}")
    if len(selected) >= CONSISTENT_YEAR_ENTRIES:
        insights.append(f"Great consistency! You tracked your mood {len(selected)} times this year")

    return YearReview(
        year=year,
        total_entries=len(selected),
        average_mood=average,
        best_month=best_month,
        most_active_month=most_active,
        longest_streak=longest_streak(selected, tz),
        distribution=tuple(mood_distribution(selected)),
        polarity_percentages=percentage_by_polarity(selected),
        insights=tuple(insights),
    )


# ── Weekly summaries ──────────────────────────────────────────────────────────

def weekly_summaries(
    entries: Iterable[MoodEntry],
    week_start: WeekStart = WeekStart.MONDAY,
    tz: Optional[tzinfo] = None,
    limit: int = 8,
) -> List[WeekSummary]:
    """One summary per calendar week that has entries, oldest first, last `limit` weeks."""
    weeks: Dict[date, List[MoodEntry]] = {}
    for entry in sorted_by_time(entries):
        start = WeekStart(week_start).start_of_week(local_day(entry.timestamp, tz))
        weeks.setdefault(start, []).append(entry)

    if limit <= 0:
        return []

    summaries = []
    for start in sorted(weeks)[-limit:]:
        week_entries = weeks[start]

        counts: Dict[MoodType, int] = {}
        for e in week_entries:
            counts[e.mood] = counts.get(e.mood, 0) + 1
        dominant = max(counts, key=counts.__getitem__) if counts else None

        summaries.append(WeekSummary(
            week_start=start,
            average_score=round(average_mood_score(week_entries), 2),
            dominant_mood=dominant,
            entry_count=len(week_entries),
        ))
    return summaries


# ── Flow graph ────────────────────────────────────────────────────────────────

def flow_points(entries: Iterable[MoodEntry], window: TimeWindow, reference: datetime) -> List[MoodPoint]:
    """Entries inside the window as an ascending (timestamp, mood, score) series."""
    return [
        MoodPoint(timestamp=e.timestamp, mood=e.mood, score=e.value_score)
        for e in sorted_by_time(filter_entries(entries, window, reference))
    ]
