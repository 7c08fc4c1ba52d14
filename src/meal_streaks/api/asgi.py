"""ASGI entrypoint for the meal streaks API."""

from meal_streaks.api.app import create_app
from meal_streaks.containers import build_container

app = create_app(build_container())
