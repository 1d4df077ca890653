# backend/moodae/services/insights.py
"""
Entry point used by the rendering layer.

Loads a snapshot from an EntrySource, runs the pure insight functions over it
and memoises the results per data version. This is the only place that reads
the wall clock, and only when the caller does not pass a reference instant.
"""
import logging
from datetime import datetime, tzinfo
from typing import List, Optional

from moodae.config import settings
from moodae.insights.cache import CacheKey, InsightCache
from moodae.insights.correlation import correlations
from moodae.insights.prediction import predict
from moodae.insights.report import build_report
from moodae.insights.review import WeekStart, flow_points, weekly_summaries, year_in_review
from moodae.insights.windows import TimeWindow, filter_entries
from moodae.models.mood import MoodType
from moodae.models.results import (
    CorrelationResult,
    InsightsReport,
    MoodPoint,
    Prediction,
    WeekSummary,
    YearReview,
)
from moodae.services.entries import EntrySource, SqlEntrySource

logger = logging.getLogger(__name__)


class InsightsService:

    def __init__(
        self,
        source: Optional[EntrySource] = None,
        cache: Optional[InsightCache] = None,
        tz: Optional[tzinfo] = None,
        week_start: Optional[WeekStart] = None,
        suggestion_limit: Optional[int] = None,
    ):
        self.source = source or SqlEntrySource()
        self.cache = cache if cache is not None else InsightCache()
        self.tz = tz or settings.tzinfo
        self.week_start = WeekStart(week_start or settings.WEEK_START)
        self.suggestion_limit = (
            suggestion_limit if suggestion_limit is not None else settings.SUGGESTED_CATEGORY_LIMIT
        )

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def _key(self, owner_id: int, kind: str, **parts) -> CacheKey:
        return CacheKey(owner_id=owner_id, entries_version=self.source.version(owner_id), kind=kind, **parts)

    # ── Reports ──────────────────────────────────────────────────────────────

    def build_report(
        self,
        owner_id: int,
        window: TimeWindow = TimeWindow.WEEK,
        reference: Optional[datetime] = None,
        mood: Optional[MoodType] = None,
    ) -> InsightsReport:
        reference = reference or self.now()
        window = TimeWindow(window)
        mood = MoodType(mood) if mood is not None else None
        key = self._key(
            owner_id, "report",
            window=window.value,
            mood=mood.value if mood else None,
            reference=reference.isoformat(),
        )

        def compute() -> InsightsReport:
            entries = self.source.load_entries(owner_id)
            logger.debug("Building %s report for owner %s over %d entries", window.value, owner_id, len(entries))
            return build_report(entries, window, reference, mood=mood, tz=self.tz)

        return self.cache.get_or_compute(key, compute)

    def prediction(self, owner_id: int, reference: Optional[datetime] = None) -> Prediction:
        reference = reference or self.now()
        key = self._key(owner_id, "prediction", reference=reference.isoformat())
        return self.cache.get_or_compute(
            key,
            lambda: predict(self.source.load_entries(owner_id), reference, self.suggestion_limit),
        )

    def correlations(self, owner_id: int, window: TimeWindow = TimeWindow.MONTH,
                     reference: Optional[datetime] = None) -> CorrelationResult:
        reference = reference or self.now()
        window = TimeWindow(window)
        key = self._key(owner_id, "correlations", window=window.value, reference=reference.isoformat())
        return self.cache.get_or_compute(
            key,
            lambda: correlations(filter_entries(self.source.load_entries(owner_id), window, reference)),
        )

    def flow(self, owner_id: int, window: TimeWindow = TimeWindow.WEEK,
             reference: Optional[datetime] = None) -> List[MoodPoint]:
        reference = reference or self.now()
        window = TimeWindow(window)
        key = self._key(owner_id, "flow", window=window.value, reference=reference.isoformat())
        points = self.cache.get_or_compute(
            key,
            lambda: tuple(flow_points(self.source.load_entries(owner_id), window, reference)),
        )
        return list(points)

    # ── Summaries ────────────────────────────────────────────────────────────

    def year_review(self, owner_id: int, year: Optional[int] = None) -> YearReview:
        year = year or self.now().year
        key = self._key(owner_id, "year", reference=str(year))
        return self.cache.get_or_compute(
            key,
            lambda: year_in_review(self.source.load_entries(owner_id), year, self.tz),
        )

    def weekly(self, owner_id: int, limit: int = 8) -> List[WeekSummary]:
        key = self._key(owner_id, "weekly", reference=f"{self.week_start.value}:{limit}")
        summaries = self.cache.get_or_compute(
            key,
            lambda: tuple(weekly_summaries(self.source.load_entries(owner_id), self.week_start, self.tz, limit)),
        )
        return list(summaries)

    def invalidate(self, owner_id: Optional[int] = None):
        self.cache.invalidate(owner_id)
