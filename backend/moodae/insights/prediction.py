# backend/moodae/insights/prediction.py
"""
Next-mood guess from recent history.

Deterministic heuristic, not a trained model: the share of positive entries
among the newest PREDICTION_WINDOW entries decides between `good` and
`challenging`, and its distance from an even split is the confidence.
"""
import logging
from datetime import datetime
from typing import Iterable, List

from moodae.insights.aggregation import average_mood_score, category_frequency
from moodae.insights.trends import detect_trend
from moodae.insights.windows import sorted_by_time
from moodae.models.mood import MoodEntry, MoodType, Polarity
from moodae.models.results import Prediction, TrendDirection

logger = logging.getLogger(__name__)

MIN_HISTORY = 3
PREDICTION_WINDOW = 7
DEFAULT_SUGGESTION_LIMIT = 4

INSUFFICIENT_HISTORY_REASON = "Not enough history yet. Log a few more moods to get a prediction."


def _ratio_reason(positive: int, total: int) -> str:
    if positive * 2 == total:
        return f"Your last {total} entries are evenly split between good and difficult days"
    if positive * 2 > total:
        return f"{positive} of your last {total} entries were positive"
    return f"{total - positive} of your last {total} entries were difficult"


def _run_length(newest_first: List[MoodEntry], polarity: Polarity) -> int:
    run = 0
    for entry in newest_first:
        if entry.polarity is not polarity:
            break
        run += 1
    return run


def predict(
    recent_entries: Iterable[MoodEntry],
    reference: datetime,
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> Prediction:
    entries = sorted_by_time(recent_entries, newest_first=True)
    if len(entries) < MIN_HISTORY:
        logger.debug("Prediction skipped: %d entries, need %d", len(entries), MIN_HISTORY)
        return Prediction(
            confidence=0.0,
            reasons=(INSUFFICIENT_HISTORY_REASON,),
            reference_time=reference,
        )

    window = entries[:PREDICTION_WINDOW]
    positive = sum(1 for e in window if e.polarity is Polarity.POSITIVE)
    good_ratio = positive / len(window)

    predicted = MoodType.GOOD if good_ratio > 0.5 else MoodType.CHALLENGING
    confidence = min(1.0, max(0.0, abs(good_ratio - 0.5) * 2))

    reasons = [_ratio_reason(positive, len(window))]

    trend = detect_trend(entries)
    if trend.direction is TrendDirection.UP:
        reasons.append("Your mood has been trending upward lately")
    elif trend.direction is TrendDirection.DOWN:
        reasons.append("Your mood has been trending downward lately")

    run = _run_length(entries, predicted.polarity)
    if run >= MIN_HISTORY:
        kind = "good" if predicted.polarity is Polarity.POSITIVE else "difficult"
        reasons.append(f"Your last {run} entries in a row were {kind} days")

    matching = [e for e in entries if e.polarity is predicted.polarity]
    suggestions = category_frequency(matching).top(suggestion_limit)

    return Prediction(
        predicted_mood=predicted,
        confidence=confidence,
        score=average_mood_score(window),
        reasons=tuple(reasons),
        suggested_categories=tuple(suggestions),
        reference_time=reference,
    )
