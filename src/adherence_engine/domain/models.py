"""Domain models for the adherence engine."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user profile stored in the database."""

    id: UUID
    username: str | None = None
    meal_count: int | None = None
    daily_calorie_goal: int | None = None
    daily_protein_goal: int | None = None
