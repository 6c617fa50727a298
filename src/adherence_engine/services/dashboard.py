"""Dashboard read model."""

from dataclasses import dataclass
from uuid import UUID

from adherence_engine.domain.stats import Dashboard
from adherence_engine.services.clock import Clock
from adherence_engine.services.plans import PlanService
from adherence_engine.services.stats import StatsService


@dataclass
class DashboardService:
    """Composes today's summary, streak and plan."""

    stats_service: StatsService
    plan_service: PlanService
    clock: Clock

    def get_dashboard(self, user_id: UUID) -> Dashboard:
        """Return the dashboard for today in the clock's timezone."""
        today = self.clock.today()
        return Dashboard(
            summary=self.stats_service.summarize(user_id, today),
            streak=self.stats_service.compute_streak(user_id, today),
            plan=self.plan_service.get_plan(user_id),
        )
