"""Domain models for the day grid."""

from dataclasses import dataclass
from datetime import date

from meal_streaks.domain.meals import MealRecord


@dataclass(frozen=True)
class DayColumn:
    """Meals logged on one calendar day of the grid."""

    day: date
    header: str
    is_today: bool
    meals: list[MealRecord]


@dataclass(frozen=True)
class FlameStyle:
    """Display color for the streak flame."""

    color: str
    opacity: float
