"""Grid projection of meals by calendar day."""

from collections.abc import Iterable
from datetime import date, timedelta

from meal_streaks.domain.grid import DayColumn, FlameStyle
from meal_streaks.domain.meals import MealRecord

DEFAULT_GRID_DAYS = 30
_WEEKDAY_LABELS = ("M", "T", "W", "Th", "F", "Sa", "Su")
_BASE_FLAME = "#FF6B35"
_HOT_FLAME = "#FF4500"
WARM_STREAK = 10
HOT_STREAK = 25
MAX_GLOW_STREAK = 50


def grid_dates(today: date, days: int = DEFAULT_GRID_DAYS) -> list[date]:
    """Return the last `days` dates ending at today, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def meals_for_day(meals: Iterable[MealRecord], day: date) -> list[MealRecord]:
    """Return meals on a day in the order they were logged."""
    return sorted(
        (meal for meal in meals if meal.occurred_on == day),
        key=lambda meal: meal.logged_at,
    )


def build_grid(
    meals: Iterable[MealRecord], today: date, days: int = DEFAULT_GRID_DAYS
) -> list[DayColumn]:
    """Bucket meals into day columns for the grid window."""
    by_day: dict[date, list[MealRecord]] = {}
    for meal in meals:
        by_day.setdefault(meal.occurred_on, []).append(meal)
    return [
        DayColumn(
            day=day,
            header=format_day_header(day),
            is_today=day == today,
            meals=meals_for_day(by_day.get(day, []), day),
        )
        for day in grid_dates(today, days)
    ]


def format_day_header(day: date) -> str:
    """Return a compact column label such as `Th 3/7`."""
    return f"{_WEEKDAY_LABELS[day.weekday()]} {day.month}/{day.day}"


def format_day_title(day: date) -> str:
    """Return a long title such as `Thursday, March 7`."""
    return f"{day.strftime('%A, %B')} {day.day}"


def flame_style(streak: int) -> FlameStyle:
    """Return the flame color for a streak length."""
    if streak == 0:
        return FlameStyle(color=_BASE_FLAME, opacity=0.5)
    if streak < WARM_STREAK:
        return FlameStyle(color=_BASE_FLAME, opacity=0.8)
    if streak < HOT_STREAK:
        return FlameStyle(color=_HOT_FLAME, opacity=0.9)
    intensity = min(streak / MAX_GLOW_STREAK, 1)
    return FlameStyle(color=f"rgb(255, {int(215 * intensity)}, 0)", opacity=1.0)
