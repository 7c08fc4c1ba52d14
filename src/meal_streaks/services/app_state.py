"""Application state and the actions that transform it.

Every screen flag and the meal collection live in one immutable `AppState`.
`reduce` returns a new state for each action; meal changes always replay the
reward engine and diff the shield flag to raise the one-shot notification.
A meal change without a new shield edge clears any pending notification.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from uuid import UUID

from meal_streaks.domain.meals import MealRecord, Rating, clean_notes
from meal_streaks.domain.rewards import RewardState, ShieldNotification
from meal_streaks.services.notifications import (
    DEFAULT_DISPLAY_SECONDS,
    detect_shield_notification,
)
from meal_streaks.services.streaks import derive_reward_state


@dataclass(frozen=True)
class AppState:
    """Snapshot of everything the tracker screen renders."""

    meals: tuple[MealRecord, ...] = ()
    rewards: RewardState = RewardState.empty()
    show_meal_log: bool = False
    show_day_detail: bool = False
    show_streak_info: bool = False
    selected_date: date | None = None
    editing_meal_id: UUID | None = None
    notification: ShieldNotification | None = None


@dataclass(frozen=True)
class LoadMeals:
    meals: tuple[MealRecord, ...]


@dataclass(frozen=True)
class AddMeal:
    meal: MealRecord


@dataclass(frozen=True)
class EditMeal:
    meal_id: UUID
    rating: Rating
    notes: str | None
    logged_at: datetime


@dataclass(frozen=True)
class DeleteMeal:
    meal_id: UUID


@dataclass(frozen=True)
class OpenMealLog:
    meal_id: UUID | None = None


@dataclass(frozen=True)
class CloseMealLog:
    pass


@dataclass(frozen=True)
class OpenDayDetail:
    day: date


@dataclass(frozen=True)
class CloseDayDetail:
    pass


@dataclass(frozen=True)
class OpenStreakInfo:
    pass


@dataclass(frozen=True)
class CloseStreakInfo:
    pass


@dataclass(frozen=True)
class DismissNotification:
    pass


Action = (
    LoadMeals
    | AddMeal
    | EditMeal
    | DeleteMeal
    | OpenMealLog
    | CloseMealLog
    | OpenDayDetail
    | CloseDayDetail
    | OpenStreakInfo
    | CloseStreakInfo
    | DismissNotification
)


def reduce(  # noqa: PLR0911
    state: AppState,
    action: Action,
    notification_seconds: int = DEFAULT_DISPLAY_SECONDS,
) -> AppState:
    """Return the state that results from applying an action."""
    if isinstance(action, LoadMeals):
        return replace(
            state,
            meals=tuple(action.meals),
            rewards=derive_reward_state(action.meals),
            notification=None,
        )
    if isinstance(action, AddMeal):
        closed = replace(state, show_meal_log=False, editing_meal_id=None)
        meals = _upserted(state.meals, action.meal)
        return _with_meals(closed, meals, notification_seconds)
    if isinstance(action, EditMeal):
        closed = replace(state, show_meal_log=False, editing_meal_id=None)
        meals = tuple(
            _edited(meal, action) if meal.id == action.meal_id else meal
            for meal in state.meals
        )
        if meals == state.meals:
            return closed
        return _with_meals(closed, meals, notification_seconds)
    if isinstance(action, DeleteMeal):
        meals = tuple(meal for meal in state.meals if meal.id != action.meal_id)
        if len(meals) == len(state.meals):
            return state
        return _with_meals(state, meals, notification_seconds)
    if isinstance(action, OpenMealLog):
        if action.meal_id is None:
            return replace(state, show_meal_log=True, editing_meal_id=None)
        return replace(
            state,
            show_meal_log=True,
            editing_meal_id=action.meal_id,
            show_day_detail=False,
        )
    if isinstance(action, CloseMealLog):
        return replace(state, show_meal_log=False, editing_meal_id=None)
    if isinstance(action, OpenDayDetail):
        return replace(state, show_day_detail=True, selected_date=action.day)
    if isinstance(action, CloseDayDetail):
        return replace(state, show_day_detail=False, selected_date=None)
    if isinstance(action, OpenStreakInfo):
        return replace(state, show_streak_info=True)
    if isinstance(action, CloseStreakInfo):
        return replace(state, show_streak_info=False)
    if isinstance(action, DismissNotification):
        return replace(state, notification=None)
    raise TypeError(f"Unsupported action: {action!r}")


def editing_meal(state: AppState) -> MealRecord | None:
    """Return the meal open in the logging sheet, if editing."""
    if state.editing_meal_id is None:
        return None
    for meal in state.meals:
        if meal.id == state.editing_meal_id:
            return meal
    return None


def _with_meals(
    state: AppState, meals: tuple[MealRecord, ...], notification_seconds: int
) -> AppState:
    rewards = derive_reward_state(meals)
    notification = detect_shield_notification(
        state.rewards, rewards, notification_seconds
    )
    return replace(
        state,
        meals=meals,
        rewards=rewards,
        notification=notification,
    )


def _upserted(
    meals: tuple[MealRecord, ...], added: MealRecord
) -> tuple[MealRecord, ...]:
    # Ids stay unique; re-adding a known id replaces that record.
    if any(meal.id == added.id for meal in meals):
        return tuple(added if meal.id == added.id else meal for meal in meals)
    return (*meals, added)


def _edited(meal: MealRecord, action: EditMeal) -> MealRecord:
    return replace(
        meal,
        rating=action.rating,
        notes=clean_notes(action.notes),
        logged_at=action.logged_at,
    )
