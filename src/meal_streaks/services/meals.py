"""Meal store service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from meal_streaks.domain.meals import (
    MealNotFoundError,
    MealRecord,
    clean_notes,
    parse_rating,
)
from meal_streaks.domain.rewards import RewardState, ShieldNotification
from meal_streaks.services.notifications import (
    DEFAULT_DISPLAY_SECONDS,
    detect_shield_notification,
)
from meal_streaks.services.streaks import derive_reward_state

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meal records."""

    def list_meals(self) -> list[MealRecord]:
        """Return every stored meal."""

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""

    def add_meal(self, meal: MealRecord) -> None:
        """Store a new meal."""

    def update_meal(self, meal: MealRecord) -> None:
        """Replace a stored meal with the same id."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Remove a meal by id."""


@dataclass(frozen=True)
class MealMutation:
    """Outcome of a change to the meal collection."""

    meal: MealRecord | None
    rewards: RewardState
    notification: ShieldNotification | None


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MealService:
    """Service that records meals and recomputes rewards after each change."""

    repository: MealRepository
    timezone_name: str = "UTC"
    notification_seconds: int = DEFAULT_DISPLAY_SECONDS
    clock: Callable[[], datetime] = field(default=_utc_now)

    def list_meals(self) -> list[MealRecord]:
        """Return the full meal collection."""
        return self.repository.list_meals()

    def get_reward_state(self) -> RewardState:
        """Return rewards derived from the full meal history."""
        return derive_reward_state(self.repository.list_meals())

    def today(self) -> date:
        """Return today's date in the local timezone."""
        return self._local_now().date()

    def log_meal(self, rating: object, notes: str | None = None) -> MealMutation:
        """Validate and store a new meal for today."""
        parsed = parse_rating(rating)
        before = self.get_reward_state()
        now = self._local_now()
        meal = MealRecord(
            id=uuid4(),
            occurred_on=now.date(),
            logged_at=now,
            rating=parsed,
            notes=clean_notes(notes),
        )
        self.repository.add_meal(meal)
        logger.info("Logged meal", extra={"meal_id": str(meal.id)})
        return self._finish(meal, before)

    def update_meal(
        self, meal_id: UUID, rating: object, notes: str | None = None
    ) -> MealMutation:
        """Change a meal's rating and notes, refreshing its logged time."""
        parsed = parse_rating(rating)
        existing = self.repository.get_meal(meal_id)
        if existing is None:
            raise MealNotFoundError(meal_id)
        before = self.get_reward_state()
        updated = MealRecord(
            id=existing.id,
            occurred_on=existing.occurred_on,
            logged_at=self._local_now(),
            rating=parsed,
            notes=clean_notes(notes),
        )
        self.repository.update_meal(updated)
        logger.info("Updated meal", extra={"meal_id": str(meal_id)})
        return self._finish(updated, before)

    def delete_meal(self, meal_id: UUID) -> MealMutation:
        """Remove a meal from the collection."""
        if self.repository.get_meal(meal_id) is None:
            raise MealNotFoundError(meal_id)
        before = self.get_reward_state()
        self.repository.delete_meal(meal_id)
        logger.info("Deleted meal", extra={"meal_id": str(meal_id)})
        return self._finish(None, before)

    def _finish(self, meal: MealRecord | None, before: RewardState) -> MealMutation:
        after = self.get_reward_state()
        notification = detect_shield_notification(
            before, after, self.notification_seconds
        )
        if notification:
            logger.info("Shield earned", extra={"streak": after.current_streak})
        return MealMutation(meal=meal, rewards=after, notification=notification)

    def _local_now(self) -> datetime:
        return self.clock().astimezone(ZoneInfo(self.timezone_name))
