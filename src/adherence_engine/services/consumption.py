"""Append-only consumption log writer."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from adherence_engine.domain.consumption import (
    CARDIO,
    FOOD,
    ConsumptionEvent,
    NewConsumptionEvent,
)
from adherence_engine.domain.errors import (
    InvalidConfiguration,
    InvalidQuantity,
    UnknownItem,
)
from adherence_engine.services.catalog import CatalogService
from adherence_engine.services.clock import Clock
from adherence_engine.services.users import UserService

_logger = logging.getLogger(__name__)


class ConsumptionRepository(Protocol):
    """Persistence interface for consumption events."""

    def append_event(self, event: NewConsumptionEvent) -> ConsumptionEvent:
        """Insert an event row and return it with its id."""

    def append_events(
        self, events: list[NewConsumptionEvent]
    ) -> list[ConsumptionEvent]:
        """Insert several event rows in one statement, all or none."""


@dataclass
class ConsumptionLogService:
    """Service that validates and appends consumption events."""

    repository: ConsumptionRepository
    catalog_service: CatalogService
    user_service: UserService
    clock: Clock

    def record_event(  # noqa: PLR0913
        self,
        user_id: UUID,
        slot_number: int | None,
        descriptor: str,
        quantity: float,
        calorie_rate_per_unit: float,
        protein_rate_per_unit: float | None = None,
        met_plan: bool = False,
        kind: str = FOOD,
    ) -> ConsumptionEvent:
        """Compute calories for a quantity and append the event."""
        _validate_quantity(quantity)
        _validate_slot(slot_number)
        self.user_service.require_user(user_id)
        event = self.repository.append_event(
            _build_event(
                user_id,
                self.clock.now(),
                slot_number,
                descriptor,
                quantity,
                calorie_rate_per_unit,
                protein_rate_per_unit,
                met_plan,
                kind,
            )
        )
        _log_event(event)
        return event

    def log_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        slot_number: int | None = None,
        descriptor: str | None = None,
        quantity: float | None = None,
        cardio_minutes: float | None = None,
        met_plan: bool = False,
    ) -> list[ConsumptionEvent]:
        """Log a food item, a cardio session, or both in one write.

        Every part is validated and resolved before anything is stored, so a
        rejected request leaves the log untouched.
        """
        has_cardio = cardio_minutes is not None and cardio_minutes != 0
        if has_cardio:
            _validate_quantity(cardio_minutes, "Cardio minutes")
        if not descriptor and not has_cardio:
            raise InvalidQuantity(
                "Nothing to log: provide a descriptor or cardio minutes"
            )
        item = None
        if descriptor:
            if quantity is None:
                quantity = 1.0
            _validate_quantity(quantity)
            _validate_slot(slot_number)
            item = self.catalog_service.lookup(descriptor)
        self.user_service.require_user(user_id)

        occurred_at = self.clock.now()
        pending = []
        if item is not None:
            pending.append(
                _build_event(
                    user_id,
                    occurred_at,
                    slot_number,
                    item.name,
                    quantity,
                    item.calories_per_unit,
                    item.protein_per_unit,
                    met_plan,
                    FOOD,
                )
            )
        if has_cardio:
            pending.append(
                _build_event(
                    user_id,
                    occurred_at,
                    None,
                    CARDIO,
                    cardio_minutes,
                    0.0,
                    None,
                    met_plan,
                    CARDIO,
                )
            )
        events = self.repository.append_events(pending)
        for event in events:
            _log_event(event)
        return events

    def log_food(
        self,
        user_id: UUID,
        slot_number: int | None,
        descriptor: str,
        quantity: float,
        met_plan: bool = False,
    ) -> ConsumptionEvent:
        """Resolve a catalog item and log the eaten quantity."""
        _validate_quantity(quantity)
        if not descriptor:
            raise UnknownItem("Empty item descriptor")
        (event,) = self.log_entry(
            user_id, slot_number, descriptor, quantity, met_plan=met_plan
        )
        return event

    def log_cardio(
        self, user_id: UUID, minutes: float, met_plan: bool = False
    ) -> ConsumptionEvent:
        """Log a cardio session; it carries no slot and no calories."""
        _validate_quantity(minutes, "Cardio minutes")
        (event,) = self.log_entry(user_id, cardio_minutes=minutes, met_plan=met_plan)
        return event


def _build_event(  # noqa: PLR0913
    user_id: UUID,
    occurred_at: datetime,
    slot_number: int | None,
    descriptor: str,
    quantity: float,
    calorie_rate_per_unit: float,
    protein_rate_per_unit: float | None,
    met_plan: bool,
    kind: str,
) -> NewConsumptionEvent:
    protein = (
        round(max(0.0, protein_rate_per_unit * quantity), 1)
        if protein_rate_per_unit is not None
        else None
    )
    return NewConsumptionEvent(
        user_id=user_id,
        occurred_at=occurred_at,
        log_date=occurred_at.date(),
        slot_number=slot_number,
        kind=kind,
        descriptor=descriptor,
        quantity=float(quantity),
        calories=max(0, _round_half_up(calorie_rate_per_unit * quantity)),
        protein=protein,
        met_plan=met_plan,
    )


def _log_event(event: ConsumptionEvent) -> None:
    _logger.info(
        "Event logged: user_id=%s kind=%s slot=%s calories=%s",
        event.user_id,
        event.kind,
        event.slot_number,
        event.calories,
    )


def _validate_quantity(quantity: object, label: str = "Quantity") -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise InvalidQuantity(f"{label} must be a number, got {quantity!r}")
    if not math.isfinite(quantity) or quantity <= 0:
        raise InvalidQuantity(f"{label} must be positive, got {quantity!r}")


def _validate_slot(slot_number: int | None) -> None:
    if slot_number is None:
        return
    if isinstance(slot_number, bool) or not isinstance(slot_number, int):
        raise InvalidConfiguration(f"Invalid slot number: {slot_number!r}")
    if slot_number < 1:
        raise InvalidConfiguration(f"Slot numbers start at 1, got {slot_number}")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
