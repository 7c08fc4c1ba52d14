"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_streaks.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_streaks.config import Settings
from meal_streaks.services.meals import MealService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_service: MealService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(
        supabase_client, table_name=resolved_settings.meals_table
    )
    meal_service = MealService(
        repository=meal_repository,
        timezone_name=resolved_settings.timezone,
        notification_seconds=resolved_settings.shield_notification_seconds,
    )
    return AppContainer(settings=resolved_settings, meal_service=meal_service)
