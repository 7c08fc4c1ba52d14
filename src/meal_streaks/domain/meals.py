"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class Rating(Enum):
    """Quality signal for a single meal."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


_RATING_ALIASES = {
    "good": Rating.GREEN,
    "neutral": Rating.YELLOW,
    "bad": Rating.RED,
}


class InvalidRatingError(ValueError):
    """Raised when a rating is outside green, yellow and red."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown meal rating: {value!r}")
        self.value = value


class MealNotFoundError(LookupError):
    """Raised when a meal id is not in the collection."""

    def __init__(self, meal_id: UUID) -> None:
        super().__init__(f"Meal {meal_id} not found")
        self.meal_id = meal_id


@dataclass(frozen=True)
class MealRecord:
    """One logged meal event."""

    id: UUID
    occurred_on: date
    logged_at: datetime
    rating: Rating
    notes: str | None = None


def parse_rating(value: object) -> Rating:
    """Parse a rating from user or storage input.

    Accepts the canonical values plus the good/neutral/bad labels shown on
    the logging sheet.
    """
    if isinstance(value, Rating):
        return value
    if not isinstance(value, str):
        raise InvalidRatingError(value)
    cleaned = value.strip().lower()
    if cleaned in _RATING_ALIASES:
        return _RATING_ALIASES[cleaned]
    try:
        return Rating(cleaned)
    except ValueError as exc:
        raise InvalidRatingError(value) from exc


def clean_notes(notes: str | None) -> str | None:
    """Trim notes, storing blank text as None."""
    if notes is None:
        return None
    cleaned = notes.strip()
    return cleaned or None
