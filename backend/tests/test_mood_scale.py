# backend/tests/test_mood_scale.py
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from moodae.models.mood import (
    MOOD_SCALE,
    SCALE_ORDER,
    CategorySelection,
    MoodEntry,
    MoodType,
    Polarity,
    moods_with_polarity,
    parse_mood,
)

NOW = datetime(2025, 7, 20, 12, 0, tzinfo=timezone.utc)


def test_scale_covers_every_mood_type():
    assert set(MOOD_SCALE) == set(MoodType)


def test_values_run_from_one_to_six_in_steps_of_one():
    ascending = list(reversed(SCALE_ORDER))
    assert ascending[0] is MoodType.OVERWHELMING
    assert ascending[-1] is MoodType.AMAZING
    assert [m.value_score for m in ascending] == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_polarity_classes():
    assert moods_with_polarity(Polarity.POSITIVE) == [MoodType.AMAZING, MoodType.GOOD, MoodType.OKAY]
    assert moods_with_polarity(Polarity.DIFFICULT) == [
        MoodType.CHALLENGING, MoodType.TOUGH, MoodType.OVERWHELMING,
    ]


def test_display_names():
    assert MoodType.AMAZING.display_name == "Amazing Day"
    assert Polarity.DIFFICULT.display_name == "Difficult Days"


def test_parse_mood_accepts_stored_strings():
    assert parse_mood("good") is MoodType.GOOD
    assert parse_mood("  Overwhelming ") is MoodType.OVERWHELMING


def test_parse_mood_rejects_unknown_values():
    with pytest.raises(ValueError, match="Invalid mood 'meh'"):
        parse_mood("meh")


def test_entry_rejects_unknown_mood():
    with pytest.raises(ValidationError):
        MoodEntry(timestamp=NOW, mood="ecstatic")


def test_entry_is_immutable():
    entry = MoodEntry(timestamp=NOW, mood=MoodType.GOOD)
    with pytest.raises(ValidationError):
        entry.mood = MoodType.TOUGH


def test_entry_exposes_scale_lookups():
    entry = MoodEntry(timestamp=NOW, mood="tough")
    assert entry.mood is MoodType.TOUGH
    assert entry.value_score == 2.0
    assert entry.polarity is Polarity.DIFFICULT
    assert entry.id is not None


def test_category_may_appear_once_per_entry():
    people = CategorySelection(category_name="People", selected_options=("friends",))
    with pytest.raises(ValidationError, match="at most once"):
        MoodEntry(timestamp=NOW, mood="good", categories=(people, people))


def test_selected_options_must_not_be_empty():
    with pytest.raises(ValidationError):
        CategorySelection(category_name="People", selected_options=())


def test_selected_options_behave_like_a_set_but_keep_order():
    selection = CategorySelection(category_name="Emotions", selected_options=("happy", "calm", "happy"))
    assert selection.selected_options == ("happy", "calm")


def test_option_names_flatten_all_categories():
    entry = MoodEntry(
        timestamp=NOW,
        mood="good",
        categories=(
            CategorySelection(category_name="Emotions", selected_options=("happy", "proud")),
            CategorySelection(category_name="People", selected_options=("friends",)),
        ),
    )
    assert entry.option_names == ["happy", "proud", "friends"]
