"""Domain models for the consumption log and reference catalog."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

FOOD = "food"
CARDIO = "cardio"


@dataclass(frozen=True)
class CatalogItem:
    """Food item from the reference catalog."""

    id: UUID
    name: str
    unit_type: str
    calories_per_unit: float
    protein_per_unit: float | None = None


@dataclass(frozen=True)
class NewConsumptionEvent:
    """Validated event ready to be appended to the log."""

    user_id: UUID
    occurred_at: datetime
    log_date: date
    slot_number: int | None
    kind: str
    descriptor: str
    quantity: float
    calories: int
    protein: float | None
    met_plan: bool


@dataclass(frozen=True)
class ConsumptionEvent:
    """Persisted consumption or exercise event."""

    id: UUID
    user_id: UUID
    occurred_at: datetime
    log_date: date
    slot_number: int | None
    kind: str
    descriptor: str
    quantity: float
    calories: int
    protein: float | None
    met_plan: bool
