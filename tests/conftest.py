"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from adherence_engine.config import Settings
from adherence_engine.containers import AppContainer
from adherence_engine.domain.consumption import (
    CatalogItem,
    ConsumptionEvent,
    NewConsumptionEvent,
)
from adherence_engine.domain.models import UserRecord
from adherence_engine.domain.plan import MealTarget
from adherence_engine.domain.stats import WeightEntry
from adherence_engine.services.cache import InMemoryCache
from adherence_engine.services.catalog import CatalogRepository, CatalogService
from adherence_engine.services.clock import Clock
from adherence_engine.services.consumption import (
    ConsumptionLogService,
    ConsumptionRepository,
)
from adherence_engine.services.dashboard import DashboardService
from adherence_engine.services.plans import PlanRepository, PlanService
from adherence_engine.services.stats import StatsRepository, StatsService
from adherence_engine.services.users import UserRepository, UserService

TODAY = date(2026, 3, 14)


@dataclass
class FixedClock(Clock):
    """Clock pinned to a settable instant."""

    current: datetime = field(
        default_factory=lambda: datetime(2026, 3, 14, 12, 0, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def add_user(self, username: str = "tester") -> UserRecord:
        user = UserRecord(id=uuid4(), username=username)
        self.users[user.id] = user
        return user

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def store_plan_settings(
        self,
        user_id: UUID,
        meal_count: int,
        daily_calorie_goal: int,
        daily_protein_goal: int | None,
    ) -> None:
        user = self.users[user_id]
        self.users[user_id] = UserRecord(
            id=user.id,
            username=user.username,
            meal_count=meal_count,
            daily_calorie_goal=daily_calorie_goal,
            daily_protein_goal=daily_protein_goal,
        )


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory meal target store keyed by (user, slot).

    replace_plan stages every change and rolls back when profile_error is set.
    """

    users: InMemoryUserRepository
    rows: dict[tuple[UUID, int], MealTarget] = field(default_factory=dict)
    profile_error: Exception | None = None

    def list_targets(self, user_id: UUID) -> list[MealTarget]:
        return sorted(
            (row for (owner, _), row in self.rows.items() if owner == user_id),
            key=lambda row: row.slot_number,
        )

    def replace_plan(
        self,
        user_id: UUID,
        targets: list[MealTarget],
        daily_calorie_goal: int,
        daily_protein_goal: int | None,
    ) -> None:
        staged = dict(self.rows)
        for target in targets:
            staged[(user_id, target.slot_number)] = target
        for owner, slot in list(staged):
            if owner == user_id and slot > len(targets):
                del staged[(owner, slot)]
        if self.profile_error is not None:
            raise self.profile_error
        self.users.store_plan_settings(
            user_id, len(targets), daily_calorie_goal, daily_protein_goal
        )
        self.rows = staged


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory food catalog."""

    items: list[CatalogItem] = field(
        default_factory=lambda: [
            CatalogItem(
                id=uuid4(),
                name="Chicken Breast",
                unit_type="100g",
                calories_per_unit=165,
                protein_per_unit=31,
            ),
            CatalogItem(
                id=uuid4(),
                name="Banana",
                unit_type="piece",
                calories_per_unit=105,
                protein_per_unit=1.3,
            ),
            CatalogItem(
                id=uuid4(),
                name="Oats",
                unit_type="g",
                calories_per_unit=3.89,
            ),
        ]
    )
    lookups: list[str] = field(default_factory=list)

    def find_by_name(self, name: str) -> CatalogItem | None:
        self.lookups.append(name)
        for item in self.items:
            if item.name.lower() == name.lower():
                return item
        return None

    def list_items(self) -> list[CatalogItem]:
        return sorted(self.items, key=lambda item: item.name)


@dataclass
class InMemoryConsumptionLog(ConsumptionRepository, StatsRepository):
    """In-memory consumption log serving both writes and reads."""

    events: list[ConsumptionEvent] = field(default_factory=list)
    weights: list[tuple[UUID, WeightEntry]] = field(default_factory=list)
    append_error: Exception | None = None

    def append_event(self, event: NewConsumptionEvent) -> ConsumptionEvent:
        stored = ConsumptionEvent(
            id=uuid4(),
            user_id=event.user_id,
            occurred_at=event.occurred_at,
            log_date=event.log_date,
            slot_number=event.slot_number,
            kind=event.kind,
            descriptor=event.descriptor,
            quantity=event.quantity,
            calories=event.calories,
            protein=event.protein,
            met_plan=event.met_plan,
        )
        self.events.append(stored)
        return stored

    def append_events(
        self, events: list[NewConsumptionEvent]
    ) -> list[ConsumptionEvent]:
        if self.append_error is not None:
            raise self.append_error
        return [self.append_event(event) for event in events]

    def add_weight(self, user_id: UUID, day: date, weight_kg: float) -> None:
        self.weights.append((user_id, WeightEntry(day=day, weight_kg=weight_kg)))

    def add(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        calories: int = 100,
        slot_number: int | None = None,
        protein: float | None = None,
        met_plan: bool = False,
        hour: int = 12,
    ) -> ConsumptionEvent:
        occurred_at = datetime(day.year, day.month, day.day, hour, tzinfo=UTC)
        return self.append_event(
            NewConsumptionEvent(
                user_id=user_id,
                occurred_at=occurred_at,
                log_date=day,
                slot_number=slot_number,
                kind="food",
                descriptor="test food",
                quantity=1.0,
                calories=calories,
                protein=protein,
                met_plan=met_plan,
            )
        )

    def list_events_for_day(self, user_id: UUID, day: date) -> list[ConsumptionEvent]:
        return [
            event
            for event in self.events
            if event.user_id == user_id and event.log_date == day
        ]

    def list_logged_days(self, user_id: UUID, as_of: date, limit: int) -> list[date]:
        days = {
            event.log_date
            for event in self.events
            if event.user_id == user_id and event.log_date <= as_of
        }
        return sorted(days, reverse=True)[:limit]

    def list_event_days(self, user_id: UUID, start: date, end: date) -> list[date]:
        return [
            event.log_date
            for event in self.events
            if event.user_id == user_id and start <= event.log_date <= end
        ]

    def list_adherent_days(self, user_id: UUID, limit: int) -> list[date]:
        days = {
            event.log_date
            for event in self.events
            if event.user_id == user_id and event.met_plan
        }
        return sorted(days, reverse=True)[:limit]

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        return sorted(
            (entry for owner, entry in self.weights if owner == user_id),
            key=lambda entry: entry.day,
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def plan_repository(
    user_repository: InMemoryUserRepository,
) -> InMemoryPlanRepository:
    return InMemoryPlanRepository(users=user_repository)


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def consumption_log() -> InMemoryConsumptionLog:
    return InMemoryConsumptionLog()


@pytest.fixture
def user(user_repository: InMemoryUserRepository) -> UserRecord:
    return user_repository.add_user()


@pytest.fixture
def user_service(user_repository: InMemoryUserRepository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def plan_service(
    plan_repository: InMemoryPlanRepository, user_service: UserService
) -> PlanService:
    return PlanService(repository=plan_repository, user_service=user_service)


@pytest.fixture
def catalog_service(catalog_repository: InMemoryCatalogRepository) -> CatalogService:
    return CatalogService(repository=catalog_repository, cache=InMemoryCache())


@pytest.fixture
def consumption_service(
    consumption_log: InMemoryConsumptionLog,
    catalog_service: CatalogService,
    user_service: UserService,
    clock: FixedClock,
) -> ConsumptionLogService:
    return ConsumptionLogService(
        repository=consumption_log,
        catalog_service=catalog_service,
        user_service=user_service,
        clock=clock,
    )


@pytest.fixture
def stats_service(
    consumption_log: InMemoryConsumptionLog,
    plan_service: PlanService,
    user_service: UserService,
) -> StatsService:
    return StatsService(
        repository=consumption_log,
        plan_service=plan_service,
        user_service=user_service,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FixedClock,
    user_service: UserService,
    plan_service: PlanService,
    catalog_service: CatalogService,
    consumption_service: ConsumptionLogService,
    stats_service: StatsService,
) -> AppContainer:
    dashboard_service = DashboardService(
        stats_service=stats_service,
        plan_service=plan_service,
        clock=clock,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        user_service=user_service,
        plan_service=plan_service,
        catalog_service=catalog_service,
        consumption_service=consumption_service,
        stats_service=stats_service,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
