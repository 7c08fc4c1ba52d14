"""FastAPI application factory."""

import logging
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from meal_streaks.api.models import MealPayload
from meal_streaks.app_logging import configure_logging
from meal_streaks.containers import AppContainer
from meal_streaks.domain.grid import DayColumn
from meal_streaks.domain.meals import InvalidRatingError, MealNotFoundError, MealRecord
from meal_streaks.domain.rewards import SHIELD_THRESHOLD, RewardState
from meal_streaks.services.grid import (
    build_grid,
    flame_style,
    format_day_title,
    meals_for_day,
)
from meal_streaks.services.meals import MealMutation

MAX_GRID_DAYS = 366


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(InvalidRatingError)
    async def invalid_rating(_request: Request, exc: InvalidRatingError) -> JSONResponse:
        logger.info("Rejected meal rating", extra={"rating": repr(exc.value)})
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/meals")
    async def list_meals(request: Request) -> dict[str, object]:
        """Return every logged meal."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.meal_service.list_meals()
        return {"meals": [_meal_payload(meal) for meal in meals]}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def log_meal(payload: MealPayload, request: Request) -> dict[str, object]:
        """Log a meal for today."""
        state_container: AppContainer = request.app.state.container
        mutation = state_container.meal_service.log_meal(payload.rating, payload.notes)
        return _mutation_payload(mutation)

    @app.patch("/meals/{meal_id}")
    async def update_meal(
        meal_id: UUID, payload: MealPayload, request: Request
    ) -> dict[str, object]:
        """Edit a meal's rating and notes."""
        state_container: AppContainer = request.app.state.container
        try:
            mutation = state_container.meal_service.update_meal(
                meal_id, payload.rating, payload.notes
            )
        except MealNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        return _mutation_payload(mutation)

    @app.delete("/meals/{meal_id}")
    async def delete_meal(meal_id: UUID, request: Request) -> dict[str, object]:
        """Delete a meal."""
        state_container: AppContainer = request.app.state.container
        try:
            mutation = state_container.meal_service.delete_meal(meal_id)
        except MealNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        return _mutation_payload(mutation)

    @app.get("/rewards")
    async def rewards(request: Request) -> dict[str, object]:
        """Return the current streak, coins and shield state."""
        state_container: AppContainer = request.app.state.container
        return _rewards_payload(state_container.meal_service.get_reward_state())

    @app.get("/grid")
    async def grid(
        request: Request,
        days: int | None = Query(default=None, ge=1, le=MAX_GRID_DAYS),
    ) -> dict[str, object]:
        """Return meals bucketed into the day grid."""
        state_container: AppContainer = request.app.state.container
        window = days if days is not None else state_container.settings.grid_days
        service = state_container.meal_service
        columns = build_grid(service.list_meals(), service.today(), window)
        return {"days": [_column_payload(column) for column in columns]}

    @app.get("/days/{day}")
    async def day_detail(day: date, request: Request) -> dict[str, object]:
        """Return the meals logged on one day."""
        state_container: AppContainer = request.app.state.container
        meals = meals_for_day(state_container.meal_service.list_meals(), day)
        return {
            "date": day.isoformat(),
            "title": format_day_title(day),
            "meals": [_meal_payload(meal) for meal in meals],
        }

    return app


def _meal_payload(meal: MealRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "occurred_on": meal.occurred_on.isoformat(),
        "logged_at": meal.logged_at.isoformat(),
        "rating": meal.rating.value,
        "notes": meal.notes,
    }


def _rewards_payload(rewards: RewardState) -> dict[str, object]:
    flame = flame_style(rewards.current_streak)
    return {
        "current_streak": rewards.current_streak,
        "total_coins": rewards.total_coins,
        "has_shield": rewards.has_shield,
        "shield_progress": rewards.shield_progress,
        "consecutive_greens": rewards.consecutive_greens,
        "shield_status": _shield_status(rewards),
        "flame": {"color": flame.color, "opacity": flame.opacity},
    }


def _shield_status(rewards: RewardState) -> str | None:
    if rewards.has_shield:
        return "Streak Shield Active!"
    if rewards.shield_progress > 0:
        return f"{rewards.shield_progress}/{SHIELD_THRESHOLD} till shield"
    return None


def _mutation_payload(mutation: MealMutation) -> dict[str, object]:
    notification = mutation.notification
    return {
        "meal": _meal_payload(mutation.meal) if mutation.meal else None,
        "rewards": _rewards_payload(mutation.rewards),
        "notification": (
            {
                "kind": notification.kind,
                "message": notification.message,
                "display_seconds": notification.display_seconds,
            }
            if notification
            else None
        ),
    }


def _column_payload(column: DayColumn) -> dict[str, object]:
    return {
        "date": column.day.isoformat(),
        "header": column.header,
        "is_today": column.is_today,
        "meals": [_meal_payload(meal) for meal in column.meals],
    }
