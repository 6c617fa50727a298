"""Supabase repository for consumption log reads."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID

from supabase import Client

from adherence_engine.adapters.supabase_consumption_repository import (
    EVENT_COLUMNS,
    parse_event,
)
from adherence_engine.adapters.supabase_errors import execute
from adherence_engine.domain.consumption import ConsumptionEvent
from adherence_engine.domain.stats import WeightEntry
from adherence_engine.services.stats import StatsRepository

PAGE_SIZE = 1000


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for summary and streak queries."""

    client: Client
    page_size: int = PAGE_SIZE

    def list_events_for_day(self, user_id: UUID, day: date) -> list[ConsumptionEvent]:
        """Return the day's events in logging order."""
        response = execute(
            self.client.table("meal_logs")
            .select(EVENT_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("log_date", day.isoformat())
            .order("logged_at", desc=False),
            "list_events_for_day",
        )
        return [parse_event(row) for row in response.data or []]

    def list_logged_days(self, user_id: UUID, as_of: date, limit: int) -> list[date]:
        """Return up to limit distinct log dates on or before as_of, newest first."""
        return self._distinct_days(
            lambda: self.client.table("meal_logs")
            .select("log_date")
            .eq("user_id", str(user_id))
            .lte("log_date", as_of.isoformat())
            .order("log_date", desc=True)
            .order("id", desc=False),
            limit,
            "list_logged_days",
        )

    def list_adherent_days(self, user_id: UUID, limit: int) -> list[date]:
        """Return up to limit distinct met-plan dates, most recent first."""
        return self._distinct_days(
            lambda: self.client.table("meal_logs")
            .select("log_date")
            .eq("user_id", str(user_id))
            .eq("met_plan", True)
            .order("log_date", desc=True)
            .order("id", desc=False),
            limit,
            "list_adherent_days",
        )

    def list_event_days(self, user_id: UUID, start: date, end: date) -> list[date]:
        """Return one log date per event inside the window."""
        rows = self._iter_rows(
            lambda: self.client.table("meal_logs")
            .select("log_date")
            .eq("user_id", str(user_id))
            .gte("log_date", start.isoformat())
            .lte("log_date", end.isoformat())
            .order("log_date", desc=False)
            .order("id", desc=False),
            "list_event_days",
        )
        return [_parse_day(row) for row in rows]

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return weight_log entries ordered by day."""
        rows = self._iter_rows(
            lambda: self.client.table("weight_log")
            .select("id, log_date, weight_kg")
            .eq("user_id", str(user_id))
            .order("log_date", desc=False)
            .order("id", desc=False),
            "list_weights",
        )
        return [
            WeightEntry(day=_parse_day(row), weight_kg=float(row["weight_kg"]))
            for row in rows
        ]

    def _distinct_days(
        self, build: Callable[[], Any], limit: int, action: str
    ) -> list[date]:
        days: list[date] = []
        for row in self._iter_rows(build, action):
            day = _parse_day(row)
            if days and days[-1] == day:
                continue
            days.append(day)
            if len(days) >= limit:
                break
        return days

    def _iter_rows(
        self, build: Callable[[], Any], action: str
    ) -> Iterator[dict[str, object]]:
        offset = 0
        while True:
            response = execute(
                build().range(offset, offset + self.page_size - 1), action
            )
            rows = response.data or []
            yield from rows
            if len(rows) < self.page_size:
                return
            offset += self.page_size


def _parse_day(row: dict[str, object]) -> date:
    return date.fromisoformat(str(row["log_date"])[:10])
