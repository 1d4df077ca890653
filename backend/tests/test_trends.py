# backend/tests/test_trends.py
import pytest

from moodae.insights.trends import classify, detect_trend, short_term_trend
from moodae.models.results import TrendDirection


def test_empty_history_is_flat():
    result = detect_trend([])
    assert result.direction is TrendDirection.FLAT
    assert result.recent_average is None
    assert result.sample_size == 0


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5])
def test_short_history_has_no_baseline(make_entry, count):
    entries = [make_entry("amazing" if i % 2 else "overwhelming", days_ago=i) for i in range(count)]
    result = detect_trend(entries)
    assert result.direction is TrendDirection.FLAT
    assert result.baseline_average is None
    assert result.delta is None
    assert result.recent_average is not None


def test_improving_mood_trends_up(make_entry):
    # 10 entries over 40 days: older five challenging, newest five amazing
    entries = [make_entry("challenging", days_ago=40 - i * 4) for i in range(5)]
    entries += [make_entry("amazing", days_ago=18 - i * 4) for i in range(5)]
    result = detect_trend(entries)
    assert result.direction is TrendDirection.UP
    assert result.recent_average == 6.0
    assert result.baseline_average == pytest.approx(27 / 7)
    assert result.delta == pytest.approx(6.0 - 27 / 7)
    assert result.sample_size == 10


def test_worsening_mood_trends_down(make_entry):
    entries = [make_entry("amazing", days_ago=20 - i) for i in range(5)]
    entries += [make_entry("tough", days_ago=5 - i) for i in range(5)]
    assert detect_trend(entries).direction is TrendDirection.DOWN


def test_steady_mood_is_flat(make_entry):
    entries = [make_entry("good", days_ago=d) for d in range(8)]
    result = detect_trend(entries)
    assert result.direction is TrendDirection.FLAT
    assert result.delta == 0


def test_input_order_does_not_matter(make_entry):
    entries = [make_entry("challenging", days_ago=10 - i) for i in range(5)]
    entries += [make_entry("amazing", days_ago=4 - i) for i in range(5)]
    assert detect_trend(list(reversed(entries))) == detect_trend(entries)


def test_classify_deadband():
    assert classify(0.5) is TrendDirection.FLAT
    assert classify(-0.5) is TrendDirection.FLAT
    assert classify(0.51) is TrendDirection.UP
    assert classify(-0.51) is TrendDirection.DOWN


def test_short_term_trend_compares_ends_of_last_week(make_entry):
    assert short_term_trend([make_entry("good"), make_entry("tough", days_ago=1)]) is TrendDirection.FLAT

    moods = ["tough", "tough", "tough", "okay", "good", "amazing", "amazing"]
    rising = [make_entry(m, days_ago=6 - i) for i, m in enumerate(moods)]
    assert short_term_trend(rising) is TrendDirection.UP

    # entries older than the newest seven do not count
    older = [make_entry("amazing", days_ago=20 + i) for i in range(5)]
    assert short_term_trend(older + rising) is TrendDirection.UP

    falling = [make_entry(m, days_ago=i) for i, m in enumerate(moods)]
    assert short_term_trend(falling) is TrendDirection.DOWN
    assert short_term_trend([make_entry("okay", days_ago=d) for d in range(5)]) is TrendDirection.FLAT
