"""Reference catalog lookups."""

import logging
from dataclasses import dataclass
from typing import Protocol

from adherence_engine.domain.consumption import CatalogItem
from adherence_engine.domain.errors import UnknownItem
from adherence_engine.services.cache import Cache

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for the food catalog."""

    def find_by_name(self, name: str) -> CatalogItem | None:
        """Return the catalog item with this name, if present."""

    def list_items(self) -> list[CatalogItem]:
        """Return all catalog items ordered by name."""


@dataclass
class CatalogService:
    """Service for catalog lookups with caching."""

    repository: CatalogRepository
    cache: Cache
    ttl_seconds: int = 300

    def lookup(self, descriptor: str) -> CatalogItem:
        """Return the catalog item for a descriptor or raise UnknownItem."""
        name = descriptor.strip()
        if not name:
            raise UnknownItem("Empty item descriptor")
        cache_key = f"catalog:item:{name.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, CatalogItem):
            return cached

        item = self.repository.find_by_name(name)
        if item is None:
            _logger.info("Catalog miss: descriptor=%s", name)
            raise UnknownItem(f"Unknown catalog item: {name}")
        self.cache.set(cache_key, item, ttl_seconds=self.ttl_seconds)
        return item

    def list_items(self) -> list[CatalogItem]:
        """Return the full catalog."""
        return self.repository.list_items()
