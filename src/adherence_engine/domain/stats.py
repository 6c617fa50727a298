"""Domain models for daily summaries and streaks."""

from dataclasses import dataclass
from datetime import date

from adherence_engine.domain.consumption import ConsumptionEvent
from adherence_engine.domain.plan import MealTarget

FULFILLED = "fulfilled"
UNFULFILLED = "unfulfilled"


@dataclass(frozen=True)
class SlotFulfillment:
    """Target and logged intake for a single meal slot."""

    slot_number: int
    label: str
    target_calories: int
    target_protein: int | None
    status: str
    logged_event: ConsumptionEvent | None
    actual_calories: int
    actual_protein: float


@dataclass(frozen=True)
class DailySummary:
    """Targets versus actuals for one calendar day."""

    day: date
    target_calories_total: int
    target_protein_total: int
    actual_calories_total: int
    actual_protein_total: float
    remaining_calories: int
    percent_consumed: float
    per_slot: list[SlotFulfillment]


@dataclass(frozen=True)
class StreakState:
    """Length of the unbroken run of logged days ending at the anchor."""

    length: int
    anchor_date: date


@dataclass(frozen=True)
class ActivityDay:
    """Number of logged events on a day."""

    day: date
    event_count: int


@dataclass(frozen=True)
class Dashboard:
    """Read model combining today's summary, streak and plan."""

    summary: DailySummary
    streak: StreakState
    plan: list[MealTarget]


@dataclass(frozen=True)
class WeightEntry:
    """Body weight recorded for a day."""

    day: date
    weight_kg: float
