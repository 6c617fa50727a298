"""Supabase repository for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from adherence_engine.adapters.supabase_errors import execute
from adherence_engine.domain.consumption import CatalogItem
from adherence_engine.services.catalog import CatalogRepository

_COLUMNS = "id, name, unit_type, calories_per_unit, protein_per_unit"


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed catalog of food items."""

    client: Client

    def find_by_name(self, name: str) -> CatalogItem | None:
        """Return the item whose name matches, ignoring case."""
        response = execute(
            self.client.table("food_items")
            .select(_COLUMNS)
            .ilike("name", _escape_like(name))
            .limit(1),
            "find_catalog_item",
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def list_items(self) -> list[CatalogItem]:
        """Return all items ordered by name."""
        response = execute(
            self.client.table("food_items")
            .select(_COLUMNS)
            .order("name", desc=False),
            "list_catalog_items",
        )
        return [_parse_item(row) for row in response.data or []]


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_item(row: dict[str, object]) -> CatalogItem:
    protein = row.get("protein_per_unit")
    return CatalogItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        unit_type=str(row.get("unit_type") or "unit"),
        calories_per_unit=float(row.get("calories_per_unit") or 0.0),
        protein_per_unit=float(protein) if protein is not None else None,
    )
