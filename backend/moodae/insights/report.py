# backend/moodae/insights/report.py
from datetime import datetime, tzinfo
from typing import Iterable, Optional

from moodae.insights.aggregation import (
    best_day,
    best_days_of_week,
    best_time_of_day,
    category_frequency,
    count_by_polarity,
    most_frequent_weekday,
    percentage_by_polarity,
    tracking_consistency,
)
from moodae.insights.correlation import has_sufficient_data, patterns_for, smart_insights
from moodae.insights.streaks import streak_summary
from moodae.insights.trends import detect_trend, short_term_trend
from moodae.insights.windows import TimeWindow, filter_entries
from moodae.models.mood import MoodEntry, MoodType
from moodae.models.results import InsightsReport


def build_report(
    entries: Iterable[MoodEntry],
    window: TimeWindow,
    reference: datetime,
    mood: Optional[MoodType] = None,
    tz: Optional[tzinfo] = None,
) -> InsightsReport:
    """
    Everything the insights screens show for one window: the entry set is
    narrowed once and each analysis runs independently over it.
    """
    window = TimeWindow(window)
    in_window = filter_entries(entries, window, reference)

    report = dict(
        window=window,
        reference_time=reference,
        entry_count=len(in_window),
        polarity_counts=count_by_polarity(in_window),
        polarity_percentages=percentage_by_polarity(in_window),
        most_frequent_weekday=most_frequent_weekday(in_window, tz),
        category_frequency=category_frequency(in_window),
        streak=streak_summary(in_window, reference, tz),
        trend=detect_trend(in_window),
        consistency=tracking_consistency(len(in_window), window),
        short_term_trend=short_term_trend(in_window),
        best_time_of_day=best_time_of_day(in_window, tz),
        best_days=tuple(best_days_of_week(in_window, tz)),
        best_day=best_day(in_window),
        smart_insights=tuple(smart_insights(in_window)),
    )
    if mood is not None:
        report.update(
            mood=mood,
            patterns=tuple(patterns_for(in_window, mood)),
            has_sufficient_data=has_sufficient_data(in_window, mood),
        )
    return InsightsReport(**report)
