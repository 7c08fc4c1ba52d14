"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from meal_streaks.config import Settings
from meal_streaks.containers import AppContainer
from meal_streaks.domain.meals import MealRecord, Rating
from meal_streaks.services.meals import MealRepository, MealService

BASE_DAY = date(2024, 3, 4)


def make_meal(
    rating: Rating | str,
    day: int = 0,
    minute: int = 0,
    notes: str | None = None,
) -> MealRecord:
    """Build a meal `day` days after BASE_DAY, logged at noon plus `minute`."""
    occurred_on = BASE_DAY + timedelta(days=day)
    logged_at = datetime(
        occurred_on.year, occurred_on.month, occurred_on.day, 12, tzinfo=UTC
    ) + timedelta(minutes=minute)
    return MealRecord(
        id=uuid4(),
        occurred_on=occurred_on,
        logged_at=logged_at,
        rating=Rating(rating),
        notes=notes,
    )


def greens(count: int, day: int = 0) -> list[MealRecord]:
    """Build `count` green meals logged a minute apart on one day."""
    return [make_meal("green", day=day, minute=index) for index in range(count)]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)

    def list_meals(self) -> list[MealRecord]:
        return list(self.meals.values())

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        return self.meals.get(meal_id)

    def add_meal(self, meal: MealRecord) -> None:
        self.meals[meal.id] = meal

    def update_meal(self, meal: MealRecord) -> None:
        self.meals[meal.id] = meal

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)


@dataclass
class FakeClock:
    """Clock that advances one minute on every read."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(minutes=1)
        return current

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def meal_service(
    meal_repository: InMemoryMealRepository, clock: FakeClock
) -> MealService:
    return MealService(repository=meal_repository, clock=clock)


@pytest.fixture
def container(settings: Settings, meal_service: MealService) -> AppContainer:
    return AppContainer(settings=settings, meal_service=meal_service)
