"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from adherence_engine.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from adherence_engine.adapters.supabase_consumption_repository import (
    SupabaseConsumptionRepository,
)
from adherence_engine.adapters.supabase_plan_repository import SupabasePlanRepository
from adherence_engine.adapters.supabase_stats_repository import SupabaseStatsRepository
from adherence_engine.adapters.supabase_user_repository import SupabaseUserRepository
from adherence_engine.config import Settings
from adherence_engine.services.cache import InMemoryCache
from adherence_engine.services.catalog import CatalogService
from adherence_engine.services.clock import Clock, SystemClock
from adherence_engine.services.consumption import ConsumptionLogService
from adherence_engine.services.dashboard import DashboardService
from adherence_engine.services.plans import PlanService
from adherence_engine.services.stats import StatsService
from adherence_engine.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    user_service: UserService
    plan_service: PlanService
    catalog_service: CatalogService
    consumption_service: ConsumptionLogService
    stats_service: StatsService
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock(resolved_settings.timezone)
    user_service = UserService(SupabaseUserRepository(supabase_client))
    plan_service = PlanService(
        repository=SupabasePlanRepository(supabase_client),
        user_service=user_service,
    )
    catalog_cache = InMemoryCache(max_entries=resolved_settings.catalog_cache_size)
    catalog_service = CatalogService(
        repository=SupabaseCatalogRepository(supabase_client),
        cache=catalog_cache,
        ttl_seconds=resolved_settings.catalog_ttl_seconds,
    )
    consumption_service = ConsumptionLogService(
        repository=SupabaseConsumptionRepository(supabase_client),
        catalog_service=catalog_service,
        user_service=user_service,
        clock=clock,
    )
    stats_service = StatsService(
        repository=SupabaseStatsRepository(supabase_client),
        plan_service=plan_service,
        user_service=user_service,
        streak_scan_limit=resolved_settings.streak_scan_limit,
    )
    dashboard_service = DashboardService(
        stats_service=stats_service,
        plan_service=plan_service,
        clock=clock,
    )

    async def close_resources() -> None:
        catalog_cache.clear()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        user_service=user_service,
        plan_service=plan_service,
        catalog_service=catalog_service,
        consumption_service=consumption_service,
        stats_service=stats_service,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
