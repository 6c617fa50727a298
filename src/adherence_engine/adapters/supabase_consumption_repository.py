"""Supabase repository for consumption events."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from adherence_engine.adapters.supabase_errors import execute
from adherence_engine.domain.consumption import ConsumptionEvent, NewConsumptionEvent
from adherence_engine.services.consumption import ConsumptionRepository

EVENT_COLUMNS = (
    "id, user_id, logged_at, log_date, meal_number, kind, descriptor, quantity, "
    "calories, protein, met_plan"
)


@dataclass
class SupabaseConsumptionRepository(ConsumptionRepository):
    """Append-only writer for the meal_logs table."""

    client: Client

    def append_event(self, event: NewConsumptionEvent) -> ConsumptionEvent:
        """Insert an event row and return it."""
        (stored,) = self.append_events([event])
        return stored

    def append_events(
        self, events: list[NewConsumptionEvent]
    ) -> list[ConsumptionEvent]:
        """Insert all rows with a single INSERT so they commit together."""
        if not events:
            return []
        response = execute(
            self.client.table("meal_logs").insert(
                [_serialize_event(event) for event in events]
            ),
            "append_events",
        )
        if not response.data or len(response.data) != len(events):
            raise RuntimeError("Failed to create meal log")
        return [parse_event(row) for row in response.data]


def _serialize_event(event: NewConsumptionEvent) -> dict[str, object]:
    return {
        "user_id": str(event.user_id),
        "logged_at": event.occurred_at.isoformat(),
        "log_date": event.log_date.isoformat(),
        "meal_number": event.slot_number,
        "kind": event.kind,
        "descriptor": event.descriptor,
        "quantity": event.quantity,
        "calories": event.calories,
        "protein": event.protein,
        "met_plan": event.met_plan,
    }


def parse_event(row: dict[str, object]) -> ConsumptionEvent:
    """Parse a meal_logs row into a domain event."""
    logged_at = datetime.fromisoformat(str(row["logged_at"]))
    log_date_raw = row.get("log_date")
    log_date = (
        date.fromisoformat(str(log_date_raw)[:10])
        if log_date_raw
        else logged_at.date()
    )
    meal_number = row.get("meal_number")
    protein = row.get("protein")
    return ConsumptionEvent(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        occurred_at=logged_at,
        log_date=log_date,
        slot_number=int(meal_number) if meal_number is not None else None,
        kind=str(row.get("kind") or "food"),
        descriptor=str(row.get("descriptor") or ""),
        quantity=float(row.get("quantity") or 0.0),
        calories=int(row.get("calories") or 0),
        protein=float(protein) if protein is not None else None,
        met_plan=bool(row.get("met_plan")),
    )
