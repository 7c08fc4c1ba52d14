"""Streak and reward engine.

The reward state is never stored. It is replayed from the whole meal history
on every change, so editing or deleting an old meal can never leave a stale
streak behind.
"""

from collections.abc import Iterable

from meal_streaks.domain.meals import InvalidRatingError, MealRecord, Rating
from meal_streaks.domain.rewards import SHIELD_THRESHOLD, RewardState

SAME_DAY_YELLOW_LIMIT = 2


def derive_reward_state(meals: Iterable[MealRecord]) -> RewardState:
    """Replay meals in logged order and return the resulting reward state."""
    ordered = sorted(meals, key=lambda meal: meal.logged_at)

    current_streak = 0
    total_coins = 0
    consecutive_greens = 0
    has_shield = False
    shield_progress = 0
    last_meal: MealRecord | None = None
    yellow_count_today = 0

    for meal in ordered:
        if last_meal is not None and last_meal.occurred_on != meal.occurred_on:
            yellow_count_today = 0

        if meal.rating is Rating.RED:
            streak_break = True
        elif meal.rating is Rating.YELLOW:
            yellow_count_today += 1
            streak_break = yellow_count_today >= SAME_DAY_YELLOW_LIMIT
            if _is_yellow_on_earlier_day(last_meal, meal):
                streak_break = True
        elif meal.rating is Rating.GREEN:
            streak_break = False
        else:
            raise InvalidRatingError(meal.rating)

        if streak_break:
            if has_shield:
                # Shield absorbs the break; the streak survives.
                has_shield = False
            else:
                current_streak = 0
            shield_progress = 0
            consecutive_greens = 0
        elif meal.rating is Rating.GREEN:
            current_streak += 1
            consecutive_greens += 1
            total_coins += coins_for_streak(current_streak)
            if not has_shield:
                shield_progress += 1
                if shield_progress >= SHIELD_THRESHOLD:
                    has_shield = True
                    shield_progress = 0
            yellow_count_today = 0

        last_meal = meal

    return RewardState(
        current_streak=current_streak,
        total_coins=total_coins,
        has_shield=has_shield,
        shield_progress=shield_progress,
        consecutive_greens=consecutive_greens,
    )


def coins_for_streak(streak: int) -> int:
    """Return coins for a green meal at the given streak position."""
    if streak <= 0:
        return 0
    base = 1
    bonus = streak - 1
    return base + bonus


def _is_yellow_on_earlier_day(last_meal: MealRecord | None, meal: MealRecord) -> bool:
    # Adjacency is by previous record, not by calendar; gaps still count.
    if last_meal is None:
        return False
    return (
        last_meal.rating is Rating.YELLOW
        and last_meal.occurred_on != meal.occurred_on
    )
