"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from adherence_engine.domain.errors import UserNotFound
from adherence_engine.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the profile for a user id, if present."""


@dataclass
class UserService:
    """Application service for user profile lookups."""

    repository: UserRepository

    def require_user(self, user_id: UUID) -> UserRecord:
        """Return the user profile or raise UserNotFound."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise UserNotFound(f"User {user_id} has no profile")
        return user
