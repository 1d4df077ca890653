# backend/moodae/insights/correlation.py
"""
Which journaled options go together with which moods.

The pattern score is a coarse proxy (a fixed weight per entry polarity,
averaged per option), not a statistical correlation coefficient.
"""
from typing import Dict, Iterable, List, Optional

from moodae.insights.aggregation import average_mood_score, category_frequency
from moodae.models.mood import SCALE_ORDER, MoodEntry, MoodType, Polarity
from moodae.models.results import (
    CategoryImpact,
    CorrelationResult,
    CorrelationStrength,
    FrequencyBucket,
    PatternScore,
    SmartInsight,
)

POLARITY_WEIGHTS: Dict[Polarity, float] = {
    Polarity.POSITIVE: 5.0,
    Polarity.DIFFICULT: 2.0,
}


def patterns_for(entries: Iterable[MoodEntry], mood: MoodType) -> List[PatternScore]:
    """
    Rank the options picked on entries of `mood`.
    Sorted by score, then by how often the option occurred, then first-seen.
    """
    weights: Dict[str, List[float]] = {}
    for entry in entries:
        if entry.mood is not mood:
            continue
        weight = POLARITY_WEIGHTS[entry.polarity]
        for option in entry.option_names:
            weights.setdefault(option, []).append(weight)

    scored = [
        PatternScore(option=option, score=sum(values) / len(values), occurrences=len(values))
        for option, values in weights.items()
    ]
    return sorted(scored, key=lambda p: (p.score, p.occurrences), reverse=True)


def entry_count_for(entries: Iterable[MoodEntry], mood: MoodType) -> int:
    return sum(1 for e in entries if e.mood is mood)


def has_sufficient_data(entries: Iterable[MoodEntry], mood: MoodType) -> bool:
    """True when at least one entry of this mood exists. Whether that is enough to show is up to the caller."""
    return any(e.mood is mood for e in entries)


def correlations(entries: Iterable[MoodEntry]) -> CorrelationResult:
    entries = list(entries)
    patterns = []
    for mood in SCALE_ORDER:
        ranked = patterns_for(entries, mood)
        if ranked:
            patterns.append((mood, tuple(ranked)))
    return CorrelationResult(patterns=tuple(patterns))


def _strength(impact: float, frequency: int) -> CorrelationStrength:
    if abs(impact) > 1.0 and frequency > 5:
        return CorrelationStrength.STRONG
    if abs(impact) > 0.5 and frequency > 3:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.WEAK


def category_impacts(entries: Iterable[MoodEntry], min_occurrences: int = 3) -> List[CategoryImpact]:
    """
    How far the average mood on days with an option sits from the overall
    average. Options seen fewer than `min_occurrences` times are skipped.
    """
    entries = list(entries)
    overall = average_mood_score(entries)
    if overall is None:
        return []

    scores: Dict[str, List[float]] = {}
    for entry in entries:
        for option in entry.option_names:
            scores.setdefault(option, []).append(entry.value_score)

    impacts = []
    for option, values in scores.items():
        if len(values) < min_occurrences:
            continue
        impact = sum(values) / len(values) - overall
        impacts.append(CategoryImpact(
            option=option,
            impact=impact,
            strength=_strength(impact, len(values)),
            frequency=len(values),
        ))
    return sorted(impacts, key=lambda i: i.impact, reverse=True)


# ── Smart insights ────────────────────────────────────────────────────────────

EMOTION_OPTIONS = frozenset({
    "excited", "relaxed", "proud", "hopeful", "happy", "enthusiastic", "refreshed", "calm", "grateful",
    "depressed", "lonely", "anxious", "sad", "angry", "pressured", "annoyed", "tired", "stressed", "bored",
})
SOCIAL_OPTIONS = frozenset({"friends", "family", "partner", "none"})
ACTIVITY_OPTIONS = frozenset({"exercise", "TV & content", "movie", "gaming", "reading", "walk", "music", "drawing"})


def _top_in(buckets: Iterable[FrequencyBucket], group: frozenset) -> Optional[FrequencyBucket]:
    return next((b for b in buckets if b.option in group), None)


def smart_insights(entries: Iterable[MoodEntry]) -> List[SmartInsight]:
    """Headline sentences for the most picked emotion, social and activity options."""
    buckets = category_frequency(entries).buckets
    insights = []

    emotion = _top_in(buckets, EMOTION_OPTIONS)
    if emotion:
        insights.append(SmartInsight(
            kind="top_emotion",
            title="Primary Emotion Pattern",
            option=emotion.option,
            description=f"You most often feel {emotion.option} ({emotion.percentage}% of entries)",
        ))

    social = _top_in(buckets, SOCIAL_OPTIONS)
    if social:
        insights.append(SmartInsight(
            kind="social_pattern",
            title="Social Connection",
            option=social.option,
            description=f"You're most often with {social.option} during mood tracking",
        ))

    activity = _top_in(buckets, ACTIVITY_OPTIONS)
    if activity:
        insights.append(SmartInsight(
            kind="activity_pattern",
            title="Favorite Activity",
            option=activity.option,
            description=f"You engage in {activity.option} most frequently",
        ))

    return insights
