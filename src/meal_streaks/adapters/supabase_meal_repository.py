"""Supabase repository for meal records."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from meal_streaks.domain.meals import MealRecord, parse_rating
from meal_streaks.services.meals import MealRepository

_COLUMNS = "id, occurred_on, logged_at, rating, notes"
# PostgREST caps each response at 1000 rows by default.
PAGE_SIZE = 1000


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal records."""

    client: Client
    table_name: str = "meals"
    page_size: int = PAGE_SIZE

    def list_meals(self) -> list[MealRecord]:
        """Return every meal row, reading past the per-request row cap."""
        meals: list[MealRecord] = []
        start = 0
        while True:
            response = (
                self.client.table(self.table_name)
                .select(_COLUMNS)
                .order("logged_at", desc=False)
                .order("id", desc=False)
                .range(start, start + self.page_size - 1)
                .execute()
            )
            rows = response.data or []
            meals.extend(_parse_row(row) for row in rows)
            if len(rows) < self.page_size:
                return meals
            start += self.page_size

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal row by id."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def add_meal(self, meal: MealRecord) -> None:
        """Insert a meal row."""
        response = self.client.table(self.table_name).insert(_to_row(meal)).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")

    def update_meal(self, meal: MealRecord) -> None:
        """Update a meal row in place."""
        payload = _to_row(meal)
        payload.pop("id")
        self.client.table(self.table_name).update(payload).eq(
            "id", str(meal.id)
        ).execute()

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table(self.table_name).delete().eq("id", str(meal_id)).execute()


def _to_row(meal: MealRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "occurred_on": meal.occurred_on.isoformat(),
        "logged_at": meal.logged_at.isoformat(),
        "rating": meal.rating.value,
        "notes": meal.notes,
    }


def _parse_row(row: dict[str, object]) -> MealRecord:
    notes = row.get("notes")
    return MealRecord(
        id=UUID(str(row["id"])),
        occurred_on=date.fromisoformat(str(row["occurred_on"])),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        rating=parse_rating(row.get("rating")),
        notes=str(notes) if notes else None,
    )
