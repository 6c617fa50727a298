"""Pydantic models for API request payloads."""

from pydantic import BaseModel


class GeneratePlanRequest(BaseModel):
    """Settings used to regenerate a user's meal plan."""

    meal_count: int
    daily_calorie_goal: int
    daily_protein_goal: int | None = None


class LogEventRequest(BaseModel):
    """Food and/or cardio entry submitted by the client."""

    slot_number: int | None = None
    descriptor: str | None = None
    quantity: float | None = None
    cardio_minutes: float | None = None
    met_plan: bool = False
