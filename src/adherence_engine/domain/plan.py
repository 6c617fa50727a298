"""Domain models for meal plans."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class MealTarget:
    """Planned calorie and protein budget for one meal slot."""

    user_id: UUID
    slot_number: int
    target_calories: int
    target_protein: int | None
    label: str
