# backend/moodae/models/results.py
"""
Immutable result records returned by the insights engine.
Produced fresh on every call; plain data with no rendering concerns.
"""
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel

from moodae.insights.windows import TimeWindow
from moodae.models.mood import MoodType


class _Record(BaseModel):
    class Config:
        frozen = True


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class CorrelationStrength(str, Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


class ConsistencyLevel(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


# ── Aggregation ───────────────────────────────────────────────────────────────

class PolarityBreakdown(_Record):
    positive: int
    difficult: int


class FrequencyBucket(_Record):
    option: str
    count: int
    percentage: int


class FrequencyDistribution(_Record):
    total_selections: int
    buckets: tuple[FrequencyBucket, ...] = ()

    def top(self, n: int) -> List[str]:
        return [b.option for b in self.buckets[:max(n, 0)]]

    def as_dict(self) -> Dict[str, int]:
        return {b.option: b.count for b in self.buckets}


class MoodDistribution(_Record):
    mood: MoodType
    count: int
    percentage: int


class MoodPoint(_Record):
    timestamp: datetime
    mood: MoodType
    score: float


# ── Streaks / trend ───────────────────────────────────────────────────────────

class StreakResult(_Record):
    current: int        # consecutive days ending today or yesterday
    longest: int        # longest run of consecutive days
    last_entry_day: Optional[date] = None


class TrendResult(_Record):
    direction: TrendDirection
    recent_average: Optional[float] = None
    baseline_average: Optional[float] = None   # None when there is too little history
    delta: Optional[float] = None
    sample_size: int = 0


# ── Correlation ───────────────────────────────────────────────────────────────

class PatternScore(_Record):
    option: str
    score: float
    occurrences: int


class CorrelationResult(_Record):
    # (mood, ranked patterns) pairs, highest mood first
    patterns: tuple[tuple[MoodType, tuple[PatternScore, ...]], ...] = ()

    @property
    def moods(self) -> List[MoodType]:
        return [mood for mood, _ in self.patterns]

    def for_mood(self, mood: MoodType) -> tuple[PatternScore, ...]:
        for candidate, ranked in self.patterns:
            if candidate is mood:
                return ranked
        return ()


class CategoryImpact(_Record):
    option: str
    impact: float       # positive = linked with better-than-usual mood
    strength: CorrelationStrength
    frequency: int


class SmartInsight(_Record):
    kind: str           # 'top_emotion' | 'social_pattern' | 'activity_pattern'
    title: str
    option: str
    description: str


# ── Prediction ────────────────────────────────────────────────────────────────

class Prediction(_Record):
    predicted_mood: Optional[MoodType] = None
    confidence: float = 0.0
    score: Optional[float] = None
    reasons: tuple[str, ...] = ()
    suggested_categories: tuple[str, ...] = ()
    reference_time: datetime

    @property
    def is_available(self) -> bool:
        return self.predicted_mood is not None and self.confidence > 0

    @property
    def confidence_text(self) -> str:
        return f"{int(self.confidence * 100)}% sure"

    @property
    def main_reason(self) -> str:
        return self.reasons[0] if self.reasons else "Based on your previous entries"


# ── Summaries ─────────────────────────────────────────────────────────────────

class WeekSummary(_Record):
    week_start: date
    average_score: float
    dominant_mood: Optional[MoodType] = None
    entry_count: int


class YearReview(_Record):
    year: int
    total_entries: int
    average_mood: Optional[float] = None
    best_month: Optional[int] = None
    most_active_month: Optional[int] = None
    longest_streak: int = 0
    distribution: tuple[MoodDistribution, ...] = ()
    polarity_percentages: PolarityBreakdown
    insights: tuple[str, ...] = ()


class InsightsReport(_Record):
    window: TimeWindow
    reference_time: datetime
    entry_count: int
    polarity_counts: PolarityBreakdown
    polarity_percentages: PolarityBreakdown
    most_frequent_weekday: Optional[str] = None
    category_frequency: FrequencyDistribution
    streak: StreakResult
    trend: TrendResult
    consistency: ConsistencyLevel
    short_term_trend: TrendDirection = TrendDirection.FLAT
    best_time_of_day: Optional[str] = None
    best_days: tuple[str, ...] = ()
    best_day: Optional[MoodPoint] = None
    smart_insights: tuple[SmartInsight, ...] = ()
    mood: Optional[MoodType] = None
    patterns: tuple[PatternScore, ...] = ()
    has_sufficient_data: Optional[bool] = None
