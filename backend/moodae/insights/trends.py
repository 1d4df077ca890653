# backend/moodae/insights/trends.py
"""
Recent-vs-baseline mood trend.

recent   = mean score of the newest RECENT_WINDOW entries
baseline = mean score of everything except the newest BASELINE_EXCLUDE entries
Differences inside ±TREND_THRESHOLD (on the 1-6 scale) are reported as flat.
"""
from typing import Iterable, List

from moodae.insights.windows import sorted_by_time
from moodae.models.mood import MoodEntry
from moodae.models.results import TrendDirection, TrendResult

TREND_THRESHOLD = 0.5
RECENT_WINDOW = 5
BASELINE_EXCLUDE = 3
MIN_BASELINE_ENTRIES = 6

SHORT_TERM_WINDOW = 7
SHORT_TERM_SPAN = 3


def _mean(entries: List[MoodEntry]) -> float:
    return sum(e.value_score for e in entries) / len(entries)


def classify(delta: float) -> TrendDirection:
    if delta > TREND_THRESHOLD:
        return TrendDirection.UP
    if delta < -TREND_THRESHOLD:
        return TrendDirection.DOWN
    return TrendDirection.FLAT


def detect_trend(entries: Iterable[MoodEntry]) -> TrendResult:
    ordered = sorted_by_time(entries)
    if not ordered:
        return TrendResult(direction=TrendDirection.FLAT)

    recent = _mean(ordered[-RECENT_WINDOW:])
    # Fewer than six entries leave no baseline to compare against
    if len(ordered) < MIN_BASELINE_ENTRIES:
        return TrendResult(
            direction=TrendDirection.FLAT,
            recent_average=recent,
            sample_size=len(ordered),
        )

    baseline = _mean(ordered[:-BASELINE_EXCLUDE])
    delta = recent - baseline
    return TrendResult(
        direction=classify(delta),
        recent_average=recent,
        baseline_average=baseline,
        delta=delta,
        sample_size=len(ordered),
    )


def short_term_trend(entries: Iterable[MoodEntry]) -> TrendDirection:
    """
    Direction across the newest SHORT_TERM_WINDOW entries: the mean of the
    first SHORT_TERM_SPAN of them against the mean of the last SHORT_TERM_SPAN.
    """
    window = sorted_by_time(entries)[-SHORT_TERM_WINDOW:]
    if len(window) < SHORT_TERM_SPAN:
        return TrendDirection.FLAT
    return classify(_mean(window[-SHORT_TERM_SPAN:]) - _mean(window[:SHORT_TERM_SPAN]))
