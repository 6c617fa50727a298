"""Daily aggregation, streaks and activity history."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from adherence_engine.domain.consumption import ConsumptionEvent
from adherence_engine.domain.plan import MealTarget
from adherence_engine.domain.stats import (
    FULFILLED,
    UNFULFILLED,
    ActivityDay,
    DailySummary,
    SlotFulfillment,
    StreakState,
    WeightEntry,
)
from adherence_engine.services.plans import PlanService
from adherence_engine.services.users import UserService


class StatsRepository(Protocol):
    """Read-side persistence interface for the consumption log."""

    def list_events_for_day(self, user_id: UUID, day: date) -> list[ConsumptionEvent]:
        """Return events whose log date equals the day."""

    def list_logged_days(self, user_id: UUID, as_of: date, limit: int) -> list[date]:
        """Return up to limit distinct log dates on or before as_of, newest first."""

    def list_event_days(self, user_id: UUID, start: date, end: date) -> list[date]:
        """Return the log date of every event in [start, end]."""

    def list_adherent_days(self, user_id: UUID, limit: int) -> list[date]:
        """Return distinct log dates with a met-plan event, most recent first."""

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return the user's weight entries, oldest first."""


@dataclass
class StatsService:
    """Service computing summaries and streaks from targets and events."""

    repository: StatsRepository
    plan_service: PlanService
    user_service: UserService
    streak_scan_limit: int = 400

    def summarize(self, user_id: UUID, day: date) -> DailySummary:
        """Return targets versus actuals for a day."""
        self.user_service.require_user(user_id)
        targets = self.plan_service.get_plan(user_id)
        events = self.repository.list_events_for_day(user_id, day)
        return aggregate_day(day, targets, events)

    def compute_streak(self, user_id: UUID, as_of: date) -> StreakState:
        """Return the run of consecutive logged days ending at as_of."""
        self.user_service.require_user(user_id)
        days = self.repository.list_logged_days(
            user_id, as_of, self.streak_scan_limit
        )
        return streak_from_days(days, as_of)

    def activity(self, user_id: UUID, as_of: date, days: int = 56) -> list[ActivityDay]:
        """Return per-day event counts for the window ending at as_of."""
        self.user_service.require_user(user_id)
        start = as_of - timedelta(days=days - 1)
        counts: dict[date, int] = {}
        for day in self.repository.list_event_days(user_id, start, as_of):
            counts[day] = counts.get(day, 0) + 1
        window = [start + timedelta(days=offset) for offset in range(days)]
        return [ActivityDay(day=day, event_count=counts.get(day, 0)) for day in window]

    def adherence_history(self, user_id: UUID, limit: int = 365) -> list[date]:
        """Return days on which the user reported following the plan."""
        self.user_service.require_user(user_id)
        return self.repository.list_adherent_days(user_id, limit)

    def weight_history(self, user_id: UUID) -> list[WeightEntry]:
        """Return recorded body weights, oldest first."""
        self.user_service.require_user(user_id)
        return self.repository.list_weights(user_id)


def aggregate_day(
    day: date, targets: list[MealTarget], events: list[ConsumptionEvent]
) -> DailySummary:
    """Join a plan with one day's events."""
    ordered = sorted(
        (event for event in events if event.log_date == day),
        key=lambda event: (event.occurred_at, str(event.id)),
    )
    target_calories = sum(target.target_calories for target in targets)
    target_protein = sum(target.target_protein or 0 for target in targets)
    actual_calories = max(0, sum(event.calories for event in ordered))
    actual_protein = round(sum(event.protein or 0.0 for event in ordered), 1)

    by_slot: dict[int, list[ConsumptionEvent]] = {}
    for event in ordered:
        if event.slot_number is not None:
            by_slot.setdefault(event.slot_number, []).append(event)

    per_slot = [
        _fulfillment(target, by_slot.get(target.slot_number, []))
        for target in sorted(targets, key=lambda target: target.slot_number)
    ]
    return DailySummary(
        day=day,
        target_calories_total=target_calories,
        target_protein_total=target_protein,
        actual_calories_total=actual_calories,
        actual_protein_total=actual_protein,
        remaining_calories=target_calories - actual_calories,
        percent_consumed=(
            round(actual_calories / target_calories * 100, 1)
            if target_calories > 0
            else 0.0
        ),
        per_slot=per_slot,
    )


def streak_from_days(days: list[date], as_of: date) -> StreakState:
    """Count contiguous days ending at as_of; a missing as_of means zero."""
    distinct = sorted({day for day in days if day <= as_of}, reverse=True)
    length = 0
    for index, day in enumerate(distinct):
        if (as_of - day).days != index:
            break
        length = index + 1
    return StreakState(length=length, anchor_date=as_of)


def _fulfillment(
    target: MealTarget, events: list[ConsumptionEvent]
) -> SlotFulfillment:
    if not events:
        return SlotFulfillment(
            slot_number=target.slot_number,
            label=target.label,
            target_calories=target.target_calories,
            target_protein=target.target_protein,
            status=UNFULFILLED,
            logged_event=None,
            actual_calories=0,
            actual_protein=0.0,
        )
    return SlotFulfillment(
        slot_number=target.slot_number,
        label=target.label,
        target_calories=target.target_calories,
        target_protein=target.target_protein,
        status=FULFILLED,
        logged_event=events[-1],
        actual_calories=sum(event.calories for event in events),
        actual_protein=round(sum(event.protein or 0.0 for event in events), 1),
    )
