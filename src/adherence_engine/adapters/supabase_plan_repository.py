"""Supabase repository for meal targets."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from adherence_engine.adapters.supabase_errors import execute
from adherence_engine.domain.plan import MealTarget
from adherence_engine.services.plans import PlanRepository

REPLACE_PLAN_FUNCTION = "replace_meal_plan"


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for the diet_targets table."""

    client: Client

    def list_targets(self, user_id: UUID) -> list[MealTarget]:
        """Return targets ordered by slot."""
        response = execute(
            self.client.table("diet_targets")
            .select("user_id, meal_number, target_calories, target_protein, label")
            .eq("user_id", str(user_id))
            .order("meal_number", desc=False),
            "list_targets",
        )
        return [_parse_target(row) for row in response.data or []]

    def replace_plan(
        self,
        user_id: UUID,
        targets: list[MealTarget],
        daily_calorie_goal: int,
        daily_protein_goal: int | None,
    ) -> None:
        """Run the replace_meal_plan function, which commits as one transaction.

        The function upserts slots 1..N, deletes slots above N and writes the
        meal count and goals to the profile.
        """
        execute(
            self.client.rpc(
                REPLACE_PLAN_FUNCTION,
                {
                    "p_user_id": str(user_id),
                    "p_daily_calorie_goal": daily_calorie_goal,
                    "p_daily_protein_goal": daily_protein_goal,
                    "p_targets": [
                        {
                            "meal_number": target.slot_number,
                            "target_calories": target.target_calories,
                            "target_protein": target.target_protein,
                            "label": target.label,
                        }
                        for target in targets
                    ],
                },
            ),
            "replace_plan",
        )


def _parse_target(row: dict[str, object]) -> MealTarget:
    target_protein = row.get("target_protein")
    slot_number = int(row["meal_number"])
    return MealTarget(
        user_id=UUID(str(row["user_id"])),
        slot_number=slot_number,
        target_calories=int(row.get("target_calories") or 0),
        target_protein=int(target_protein) if target_protein is not None else None,
        label=str(row.get("label") or f"Meal {slot_number}"),
    )
