"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from adherence_engine.adapters.supabase_errors import execute
from adherence_engine.domain.models import UserRecord
from adherence_engine.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the profile for a user id, if present."""
        response = execute(
            self.client.table("profiles")
            .select("id, username, number_of_meals, target_calories, target_protein")
            .eq("id", str(user_id))
            .limit(1),
            "get_user",
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserRecord(
            id=UUID(row["id"]),
            username=row.get("username"),
            meal_count=_optional_int(row.get("number_of_meals")),
            daily_calorie_goal=_optional_int(row.get("target_calories")),
            daily_protein_goal=_optional_int(row.get("target_protein")),
        )


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)
