"""Client-facing API endpoints guarded by a service token."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from adherence_engine.api.models import GeneratePlanRequest, LogEventRequest

if TYPE_CHECKING:
    from adherence_engine.containers import AppContainer
    from adherence_engine.domain.consumption import CatalogItem, ConsumptionEvent
    from adherence_engine.domain.plan import MealTarget
    from adherence_engine.domain.stats import (
        DailySummary,
        SlotFulfillment,
        StreakState,
    )


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include the shared service token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(tags=["adherence"], dependencies=[Depends(require_api_token)])


@router.post("/users/{user_id}/plan")
async def generate_plan(
    user_id: UUID, payload: GeneratePlanRequest, request: Request
) -> dict[str, object]:
    """Regenerate the user's meal targets."""
    container: AppContainer = request.app.state.container
    targets = container.plan_service.generate_plan(
        user_id,
        meal_count=payload.meal_count,
        daily_calorie_goal=payload.daily_calorie_goal,
        daily_protein_goal=payload.daily_protein_goal,
    )
    return {"plan": [_serialize_target(target) for target in targets]}


@router.get("/users/{user_id}/plan")
async def get_plan(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's current meal targets."""
    container: AppContainer = request.app.state.container
    container.user_service.require_user(user_id)
    targets = container.plan_service.get_plan(user_id)
    return {"plan": [_serialize_target(target) for target in targets]}


@router.post("/users/{user_id}/logs")
async def log_event(
    user_id: UUID, payload: LogEventRequest, request: Request
) -> dict[str, object]:
    """Append a food entry, a cardio entry, or both."""
    container: AppContainer = request.app.state.container
    events = container.consumption_service.log_entry(
        user_id,
        slot_number=payload.slot_number,
        descriptor=payload.descriptor,
        quantity=payload.quantity,
        cardio_minutes=payload.cardio_minutes,
        met_plan=payload.met_plan,
    )
    return {"events": [_serialize_event(event) for event in events]}


@router.get("/users/{user_id}/dashboard")
async def dashboard(user_id: UUID, request: Request) -> dict[str, object]:
    """Return today's summary, streak and plan."""
    container: AppContainer = request.app.state.container
    result = container.dashboard_service.get_dashboard(user_id)
    return {
        "summary": _serialize_summary(result.summary),
        "streak": _serialize_streak(result.streak),
        "plan": [_serialize_target(target) for target in result.plan],
    }


@router.get("/users/{user_id}/summary/{day}")
async def summary(user_id: UUID, day: date, request: Request) -> dict[str, object]:
    """Return targets versus actuals for a day."""
    container: AppContainer = request.app.state.container
    return _serialize_summary(container.stats_service.summarize(user_id, day))


@router.get("/users/{user_id}/streak")
async def streak(
    user_id: UUID, request: Request, as_of: date | None = None
) -> dict[str, object]:
    """Return the current logging streak."""
    container: AppContainer = request.app.state.container
    anchor = as_of or container.clock.today()
    return _serialize_streak(container.stats_service.compute_streak(user_id, anchor))


@router.get("/users/{user_id}/activity")
async def activity(
    user_id: UUID,
    request: Request,
    days: int | None = Query(default=None, ge=1, le=366),
) -> dict[str, object]:
    """Return the activity grid, the days the plan was followed and weights."""
    container: AppContainer = request.app.state.container
    window = days or container.settings.activity_window_days
    grid = container.stats_service.activity(
        user_id, container.clock.today(), days=window
    )
    adherent = container.stats_service.adherence_history(user_id)
    weights = container.stats_service.weight_history(user_id)
    return {
        "activity": [
            {"day": entry.day.isoformat(), "event_count": entry.event_count}
            for entry in grid
        ],
        "adherence": [day.isoformat() for day in adherent],
        "weights": [
            {"day": entry.day.isoformat(), "weight_kg": entry.weight_kg}
            for entry in weights
        ],
    }


@router.get("/foods")
async def list_foods(request: Request) -> dict[str, object]:
    """Return the reference catalog."""
    container: AppContainer = request.app.state.container
    items = container.catalog_service.list_items()
    return {"foods": [_serialize_item(item) for item in items]}


def _serialize_target(target: MealTarget) -> dict[str, object]:
    return {
        "slot_number": target.slot_number,
        "label": target.label,
        "target_calories": target.target_calories,
        "target_protein": target.target_protein,
    }


def _serialize_event(event: ConsumptionEvent) -> dict[str, object]:
    return {
        "id": str(event.id),
        "occurred_at": event.occurred_at.isoformat(),
        "log_date": event.log_date.isoformat(),
        "slot_number": event.slot_number,
        "kind": event.kind,
        "descriptor": event.descriptor,
        "quantity": event.quantity,
        "calories": event.calories,
        "protein": event.protein,
        "met_plan": event.met_plan,
    }


def _serialize_slot(slot: SlotFulfillment) -> dict[str, object]:
    return {
        "slot_number": slot.slot_number,
        "label": slot.label,
        "status": slot.status,
        "target_calories": slot.target_calories,
        "target_protein": slot.target_protein,
        "actual_calories": slot.actual_calories,
        "actual_protein": slot.actual_protein,
        "logged_event": _serialize_event(slot.logged_event)
        if slot.logged_event
        else None,
    }


def _serialize_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "date": summary.day.isoformat(),
        "target_calories_total": summary.target_calories_total,
        "target_protein_total": summary.target_protein_total,
        "actual_calories_total": summary.actual_calories_total,
        "actual_protein_total": summary.actual_protein_total,
        "remaining_calories": summary.remaining_calories,
        "percent_consumed": summary.percent_consumed,
        "per_slot": [_serialize_slot(slot) for slot in summary.per_slot],
    }


def _serialize_streak(streak: StreakState) -> dict[str, object]:
    return {"length": streak.length, "anchor_date": streak.anchor_date.isoformat()}


def _serialize_item(item: CatalogItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "unit_type": item.unit_type,
        "calories_per_unit": item.calories_per_unit,
        "protein_per_unit": item.protein_per_unit,
    }
