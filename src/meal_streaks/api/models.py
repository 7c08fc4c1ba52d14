"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field


class MealPayload(BaseModel):
    """Rating and notes submitted from the logging sheet."""

    rating: str
    notes: str | None = Field(default=None, max_length=2000)
