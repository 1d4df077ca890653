# backend/moodae/models/mood.py
"""
Mood scale and journal entry value types.

The six mood types, their numeric values and their polarity classes are a
declared constant table. Nothing in the engine derives them from data.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator


class Polarity(str, Enum):
    POSITIVE = "positive"
    DIFFICULT = "difficult"

    @property
    def display_name(self) -> str:
        return "Good Days" if self is Polarity.POSITIVE else "Difficult Days"


class MoodType(str, Enum):
    AMAZING = "amazing"
    GOOD = "good"
    OKAY = "okay"
    CHALLENGING = "challenging"
    TOUGH = "tough"
    OVERWHELMING = "overwhelming"

    @property
    def value_score(self) -> float:
        return MOOD_SCALE[self].value

    @property
    def polarity(self) -> Polarity:
        return MOOD_SCALE[self].polarity

    @property
    def display_name(self) -> str:
        return MOOD_SCALE[self].display_name


@dataclass(frozen=True)
class MoodScaleEntry:
    value: float
    polarity: Polarity
    display_name: str


# ── Constants ─────────────────────────────────────────────────────────────────

MOOD_SCALE: Dict[MoodType, MoodScaleEntry] = {
    MoodType.AMAZING:      MoodScaleEntry(6.0, Polarity.POSITIVE, "Amazing Day"),
    MoodType.GOOD:         MoodScaleEntry(5.0, Polarity.POSITIVE, "Good Day"),
    MoodType.OKAY:         MoodScaleEntry(4.0, Polarity.POSITIVE, "Okay Day"),
    MoodType.CHALLENGING:  MoodScaleEntry(3.0, Polarity.DIFFICULT, "Challenging Day"),
    MoodType.TOUGH:        MoodScaleEntry(2.0, Polarity.DIFFICULT, "Tough Day"),
    MoodType.OVERWHELMING: MoodScaleEntry(1.0, Polarity.DIFFICULT, "Overwhelming Day"),
}

# Highest score first, the order distributions are listed in.
SCALE_ORDER = sorted(MOOD_SCALE, key=lambda m: MOOD_SCALE[m].value, reverse=True)


def parse_mood(raw: str) -> MoodType:
    """Convert a stored/raw mood string into a MoodType."""
    try:
        return MoodType((raw or "").strip().lower())
    except ValueError:
        raise ValueError(f"Invalid mood '{raw}'. Valid: {[m.value for m in MoodType]}") from None


def moods_with_polarity(polarity: Polarity) -> list[MoodType]:
    return [m for m in SCALE_ORDER if m.polarity is polarity]


# ── Entry models ──────────────────────────────────────────────────────────────

class CategorySelection(BaseModel):
    """Options picked under one journal category, e.g. People -> friends, family."""
    category_name: str
    selected_options: tuple[str, ...]

    class Config:
        frozen = True

    @field_validator("selected_options")
    @classmethod
    def _non_empty_unique(cls, options: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(dict.fromkeys(o.strip() for o in options if o and o.strip()))
        if not cleaned:
            raise ValueError("selected_options must contain at least one option")
        return cleaned


class MoodEntry(BaseModel):
    """One journaled moment. Edits replace the whole record."""
    id: UUID = Field(default_factory=uuid4)
    timestamp: datetime
    mood: MoodType
    text_entry: Optional[str] = None
    categories: tuple[CategorySelection, ...] = ()
    has_photo: bool = False
    has_audio: bool = False

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _one_selection_per_category(self) -> "MoodEntry":
        names = [c.category_name for c in self.categories]
        if len(names) != len(set(names)):
            raise ValueError("a category may appear at most once per entry")
        return self

    @property
    def polarity(self) -> Polarity:
        return self.mood.polarity

    @property
    def value_score(self) -> float:
        return self.mood.value_score

    @property
    def option_names(self) -> list[str]:
        """Every selected option across all categories, in entry order."""
        return [option for selection in self.categories for option in selection.selected_options]
