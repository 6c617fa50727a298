"""Translate Supabase driver failures into StorageUnavailable."""

import logging
from typing import Any, Protocol

import httpx
from postgrest.exceptions import APIError

from adherence_engine.domain.errors import StorageUnavailable

_logger = logging.getLogger(__name__)


class ExecutableQuery(Protocol):
    """A PostgREST request builder."""

    def execute(self) -> Any:
        """Send the request and return the API response."""


def execute(query: ExecutableQuery, action: str) -> Any:
    """Run a query, surfacing driver errors as StorageUnavailable."""
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        _logger.warning("Supabase %s failed: %s", action, exc)
        raise StorageUnavailable(f"Storage unavailable during {action}") from exc
