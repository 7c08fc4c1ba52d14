"""Tests for the application state reducer."""

from datetime import date, timedelta

from meal_streaks.domain.meals import Rating
from meal_streaks.services.app_state import (
    AddMeal,
    AppState,
    CloseDayDetail,
    CloseMealLog,
    CloseStreakInfo,
    DeleteMeal,
    DismissNotification,
    EditMeal,
    LoadMeals,
    OpenDayDetail,
    OpenMealLog,
    OpenStreakInfo,
    editing_meal,
    reduce,
)
from tests.conftest import greens, make_meal


def test_load_meals_recomputes_without_notification() -> None:
    state = reduce(AppState(), LoadMeals(tuple(greens(7))))

    assert state.rewards.has_shield is True
    assert state.notification is None
    assert len(state.meals) == 7


def test_add_meal_closes_sheet_and_updates_rewards() -> None:
    state = reduce(AppState(), OpenMealLog())
    assert state.show_meal_log is True

    state = reduce(state, AddMeal(make_meal("green")))

    assert state.show_meal_log is False
    assert state.rewards.current_streak == 1
    assert state.rewards.total_coins == 1


def test_seventh_added_green_raises_notification_until_dismissed() -> None:
    state = reduce(AppState(), LoadMeals(tuple(greens(6))))

    state = reduce(state, AddMeal(make_meal("green", minute=30)))

    assert state.notification is not None
    assert state.rewards.has_shield is True

    state = reduce(state, DismissNotification())

    assert state.notification is None


def test_edit_meal_replaces_rating_and_logged_at() -> None:
    red = make_meal("red")
    green = make_meal("green", minute=1)
    state = reduce(AppState(), LoadMeals((red, green)))
    state = reduce(state, OpenMealLog(red.id))
    assert editing_meal(state) == red

    state = reduce(
        state,
        EditMeal(
            meal_id=red.id,
            rating=Rating.GREEN,
            notes=" better ",
            logged_at=green.logged_at + timedelta(minutes=5),
        ),
    )

    edited = state.meals[0]
    assert edited.rating is Rating.GREEN
    assert edited.notes == "better"
    assert edited.occurred_on == red.occurred_on
    assert state.rewards.current_streak == 2
    assert state.show_meal_log is False
    assert editing_meal(state) is None


def test_edit_unknown_meal_keeps_meals() -> None:
    meals = (make_meal("green"),)
    state = reduce(AppState(), LoadMeals(meals))

    state = reduce(
        state,
        EditMeal(
            meal_id=make_meal("red").id,
            rating=Rating.RED,
            notes=None,
            logged_at=meals[0].logged_at,
        ),
    )

    assert state.meals == meals
    assert state.rewards.current_streak == 1


def test_delete_meal_recomputes() -> None:
    green = make_meal("green")
    red = make_meal("red", minute=1)
    state = reduce(AppState(), LoadMeals((green, red)))
    assert state.rewards.current_streak == 0

    state = reduce(state, DeleteMeal(red.id))

    assert state.meals == (green,)
    assert state.rewards.current_streak == 1


def test_editing_from_day_detail_closes_it() -> None:
    meal = make_meal("green")
    state = reduce(AppState(), LoadMeals((meal,)))
    state = reduce(state, OpenDayDetail(date(2024, 3, 4)))
    assert state.show_day_detail is True
    assert state.selected_date == date(2024, 3, 4)

    state = reduce(state, OpenMealLog(meal.id))

    assert state.show_day_detail is False
    assert state.show_meal_log is True
    assert state.editing_meal_id == meal.id


def test_modal_flags_toggle() -> None:
    state = reduce(AppState(), OpenStreakInfo())
    assert state.show_streak_info is True
    state = reduce(state, CloseStreakInfo())
    assert state.show_streak_info is False

    state = reduce(state, OpenDayDetail(date(2024, 3, 5)))
    state = reduce(state, CloseDayDetail())
    assert state.show_day_detail is False
    assert state.selected_date is None

    state = reduce(state, OpenMealLog())
    state = reduce(state, CloseMealLog())
    assert state.show_meal_log is False
    assert state.editing_meal_id is None


def test_reduce_returns_new_state() -> None:
    original = AppState()

    updated = reduce(original, OpenStreakInfo())

    assert original.show_streak_info is False
    assert updated is not original


def test_adding_known_id_replaces_record() -> None:
    meal = make_meal("green")
    state = reduce(AppState(), AddMeal(meal))

    state = reduce(state, AddMeal(meal))

    assert state.meals == (meal,)
    assert state.rewards.total_coins == 1

    state = reduce(state, DeleteMeal(meal.id))

    assert state.meals == ()
    assert state.rewards.current_streak == 0


def test_later_change_without_new_shield_clears_notification() -> None:
    state = reduce(AppState(), LoadMeals(tuple(greens(6))))
    state = reduce(state, AddMeal(make_meal("green", minute=30)))
    assert state.notification is not None

    state = reduce(state, AddMeal(make_meal("red", minute=31)))

    assert state.rewards.has_shield is False
    assert state.notification is None
