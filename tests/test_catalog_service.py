"""Tests for the reference catalog service."""

import pytest

from adherence_engine.domain.errors import UnknownItem
from adherence_engine.services.catalog import CatalogService
from tests.conftest import InMemoryCatalogRepository


def test_lookup_matches_case_insensitively(catalog_service: CatalogService) -> None:
    item = catalog_service.lookup("  banana ")

    assert item.name == "Banana"
    assert item.calories_per_unit == 105


def test_lookup_caches_found_items(
    catalog_service: CatalogService, catalog_repository: InMemoryCatalogRepository
) -> None:
    catalog_service.lookup("Oats")
    catalog_service.lookup("oats")

    assert catalog_repository.lookups == ["Oats"]


def test_lookup_does_not_cache_misses(
    catalog_service: CatalogService, catalog_repository: InMemoryCatalogRepository
) -> None:
    for _ in range(2):
        with pytest.raises(UnknownItem):
            catalog_service.lookup("Kale")

    assert catalog_repository.lookups == ["Kale", "Kale"]


def test_lookup_rejects_blank_descriptor(catalog_service: CatalogService) -> None:
    with pytest.raises(UnknownItem):
        catalog_service.lookup("   ")


def test_list_items_sorted_by_name(catalog_service: CatalogService) -> None:
    names = [item.name for item in catalog_service.list_items()]

    assert names == ["Banana", "Chicken Breast", "Oats"]
