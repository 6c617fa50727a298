"""Meal plan generation and replace-all persistence."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from adherence_engine.domain.errors import InvalidConfiguration
from adherence_engine.domain.plan import MealTarget
from adherence_engine.services.users import UserService

MIN_MEALS = 1
MAX_MEALS = 10

_logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Persistence interface for meal targets."""

    def list_targets(self, user_id: UUID) -> list[MealTarget]:
        """Return the user's targets ordered by slot number."""

    def replace_plan(
        self,
        user_id: UUID,
        targets: list[MealTarget],
        daily_calorie_goal: int,
        daily_protein_goal: int | None,
    ) -> None:
        """Atomically replace the user's targets and store the plan settings.

        The targets, the removal of slots above len(targets) and the profile's
        meal count and goals commit together or not at all.
        """


def generate_targets(
    user_id: UUID,
    meal_count: int,
    daily_calorie_goal: int,
    daily_protein_goal: int | None = None,
) -> list[MealTarget]:
    """Split daily goals evenly across slots, remainder on the last slot."""
    _validate_settings(meal_count, daily_calorie_goal, daily_protein_goal)
    calories = _split(daily_calorie_goal, meal_count)
    protein = (
        _split(daily_protein_goal, meal_count)
        if daily_protein_goal is not None
        else [None] * meal_count
    )
    return [
        MealTarget(
            user_id=user_id,
            slot_number=index + 1,
            target_calories=calories[index],
            target_protein=protein[index],
            label=f"Meal {index + 1}",
        )
        for index in range(meal_count)
    ]


@dataclass
class PlanService:
    """Service that owns the user's meal targets."""

    repository: PlanRepository
    user_service: UserService

    def generate_plan(
        self,
        user_id: UUID,
        meal_count: int,
        daily_calorie_goal: int,
        daily_protein_goal: int | None = None,
    ) -> list[MealTarget]:
        """Regenerate and store the user's plan, discarding the old one."""
        targets = generate_targets(
            user_id, meal_count, daily_calorie_goal, daily_protein_goal
        )
        self.user_service.require_user(user_id)
        self.repository.replace_plan(
            user_id,
            targets,
            daily_calorie_goal=daily_calorie_goal,
            daily_protein_goal=daily_protein_goal,
        )
        _logger.info(
            "Plan regenerated: user_id=%s meals=%s calories=%s protein=%s",
            user_id,
            meal_count,
            daily_calorie_goal,
            daily_protein_goal,
        )
        return targets

    def get_plan(self, user_id: UUID) -> list[MealTarget]:
        """Return the user's targets; an unconfigured plan is empty."""
        targets = self.repository.list_targets(user_id)
        return sorted(targets, key=lambda target: target.slot_number)


def _validate_settings(
    meal_count: int, daily_calorie_goal: int, daily_protein_goal: int | None
) -> None:
    if not _is_int(meal_count) or not MIN_MEALS <= meal_count <= MAX_MEALS:
        raise InvalidConfiguration(
            f"meal_count must be between {MIN_MEALS} and {MAX_MEALS}, "
            f"got {meal_count!r}"
        )
    if not _is_int(daily_calorie_goal) or daily_calorie_goal < 0:
        raise InvalidConfiguration(
            f"daily_calorie_goal must be a non-negative integer, "
            f"got {daily_calorie_goal!r}"
        )
    if daily_protein_goal is not None and (
        not _is_int(daily_protein_goal) or daily_protein_goal < 0
    ):
        raise InvalidConfiguration(
            f"daily_protein_goal must be a non-negative integer, "
            f"got {daily_protein_goal!r}"
        )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _split(total: int, parts: int) -> list[int]:
    share, remainder = divmod(total, parts)
    values = [share] * parts
    values[-1] += remainder
    return values
