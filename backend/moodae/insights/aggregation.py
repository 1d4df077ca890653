# backend/moodae/insights/aggregation.py
"""
Counts, percentages and groupings over an (already filtered) entry set.
Every function is total: empty input gives zero/empty results.
"""
from datetime import tzinfo
from typing import Dict, Iterable, List, Optional

from moodae.insights.windows import (
    WEEKDAY_NAMES,
    TimeWindow,
    local_day,
    local_time,
    sorted_by_time,
    weekday_name,
)
from moodae.models.mood import SCALE_ORDER, MoodEntry, MoodType, Polarity
from moodae.models.results import (
    ConsistencyLevel,
    FrequencyBucket,
    FrequencyDistribution,
    MoodDistribution,
    MoodPoint,
    PolarityBreakdown,
)

# (high, moderate) minimum entry counts per window
CONSISTENCY_THRESHOLDS: Dict[TimeWindow, tuple[int, int]] = {
    TimeWindow.WEEK: (5, 3),
    TimeWindow.MONTH: (20, 10),
    TimeWindow.YEAR: (200, 100),
}

TIME_OF_DAY_ORDER = ["morning", "afternoon", "evening", "night"]


def percent(count: int, total: int) -> int:
    """round(count / total * 100), half-up, 0 when total is 0."""
    if total <= 0:
        return 0
    return (count * 200 + total) // (2 * total)


def count_by_polarity(entries: Iterable[MoodEntry]) -> PolarityBreakdown:
    positive = difficult = 0
    for entry in entries:
        if entry.polarity is Polarity.POSITIVE:
            positive += 1
        else:
            difficult += 1
    return PolarityBreakdown(positive=positive, difficult=difficult)


def percentage_by_polarity(entries: Iterable[MoodEntry]) -> PolarityBreakdown:
    counts = count_by_polarity(entries)
    total = counts.positive + counts.difficult
    return PolarityBreakdown(
        positive=percent(counts.positive, total),
        difficult=percent(counts.difficult, total),
    )


def most_frequent_weekday(entries: Iterable[MoodEntry], tz: Optional[tzinfo] = None) -> Optional[str]:
    """Weekday with the most entries; ties go to the earliest day in Sunday..Saturday."""
    counts: Dict[str, int] = {}
    for entry in entries:
        name = weekday_name(local_day(entry.timestamp, tz))
        counts[name] = counts.get(name, 0) + 1
    if not counts:
        return None

    best, best_count = None, 0
    for name in WEEKDAY_NAMES:
        if counts.get(name, 0) > best_count:
            best, best_count = name, counts[name]
    return best


def category_frequency(entries: Iterable[MoodEntry], limit: Optional[int] = None) -> FrequencyDistribution:
    """
    Tally every selected option across every category of every entry.

    Options are keyed by name only, so "friends" picked under two different
    categories lands in one bucket. Sorted by count, ties in first-seen order.
    """
    counts: Dict[str, int] = {}
    for entry in entries:
        for option in entry.option_names:
            counts[option] = counts.get(option, 0) + 1

    total = sum(counts.values())
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:max(limit, 0)]

    return FrequencyDistribution(
        total_selections=total,
        buckets=tuple(
            FrequencyBucket(option=option, count=count, percentage=percent(count, total))
            for option, count in ranked
        ),
    )


def mood_distribution(entries: Iterable[MoodEntry]) -> List[MoodDistribution]:
    """Count and share of each mood type, highest mood first, absent moods omitted."""
    counts: Dict[MoodType, int] = {}
    for entry in entries:
        counts[entry.mood] = counts.get(entry.mood, 0) + 1
    total = sum(counts.values())
    return [
        MoodDistribution(mood=mood, count=counts[mood], percentage=percent(counts[mood], total))
        for mood in SCALE_ORDER
        if mood in counts
    ]


def average_mood_score(entries: Iterable[MoodEntry]) -> Optional[float]:
    scores = [e.value_score for e in entries]
    if not scores:
        return None
    return sum(scores) / len(scores)


def time_of_day(hour: int) -> str:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def time_of_day_averages(entries: Iterable[MoodEntry], tz: Optional[tzinfo] = None) -> Dict[str, float]:
    """Average mood score per part of the day, only for parts that have entries."""
    buckets: Dict[str, List[float]] = {}
    for entry in entries:
        bucket = time_of_day(local_time(entry.timestamp, tz).hour)
        buckets.setdefault(bucket, []).append(entry.value_score)
    return {
        name: sum(buckets[name]) / len(buckets[name])
        for name in TIME_OF_DAY_ORDER
        if name in buckets
    }


def weekday_averages(entries: Iterable[MoodEntry], tz: Optional[tzinfo] = None) -> Dict[str, float]:
    buckets: Dict[str, List[float]] = {}
    for entry in entries:
        buckets.setdefault(weekday_name(local_day(entry.timestamp, tz)), []).append(entry.value_score)
    return {
        name: sum(buckets[name]) / len(buckets[name])
        for name in WEEKDAY_NAMES
        if name in buckets
    }


def best_time_of_day(entries: Iterable[MoodEntry], tz: Optional[tzinfo] = None) -> Optional[str]:
    """Part of the day with the highest average mood; ties go to the earlier part."""
    averages = time_of_day_averages(entries, tz)
    return max(averages, key=averages.__getitem__, default=None)


def best_days_of_week(entries: Iterable[MoodEntry], tz: Optional[tzinfo] = None, limit: int = 3) -> List[str]:
    averages = weekday_averages(entries, tz)
    # sorted() is stable, so equal averages keep Sunday..Saturday order
    ranked = sorted(averages, key=averages.__getitem__, reverse=True)
    return ranked[:max(limit, 0)]


def best_day(entries: Iterable[MoodEntry]) -> Optional[MoodPoint]:
    """Highest-scoring entry, the earliest one on ties."""
    ordered = sorted_by_time(entries)
    if not ordered:
        return None
    top = max(ordered, key=lambda e: e.value_score)
    return MoodPoint(timestamp=top.timestamp, mood=top.mood, score=top.value_score)


def consistency_score(entries: Iterable[MoodEntry]) -> float:
    """Distinct moods per entry, two decimals. Low values mean a steady mood."""
    entries = list(entries)
    if not entries:
        return 0.0
    return round(len({e.mood for e in entries}) / len(entries), 2)


def tracking_consistency(entry_count: int, window: TimeWindow) -> ConsistencyLevel:
    high, moderate = CONSISTENCY_THRESHOLDS[TimeWindow(window)]
    if entry_count >= high:
        return ConsistencyLevel.HIGH
    if entry_count >= moderate:
        return ConsistencyLevel.MODERATE
    return ConsistencyLevel.LOW
