"""Supabase implementation for fridge inventory persistence."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from unibite.adapters.supabase_store import execute, parse_timestamp
from unibite.domain.errors import StoreError
from unibite.domain.inventory import IngredientCategory, InventoryItem
from unibite.services.inventory import InventoryRepository

INVENTORY_TABLE = "inventory"


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed repository for inventory items."""

    client: Client

    def add_item(
        self,
        user_id: str,
        ingredient_name: str,
        category: IngredientCategory,
        added_at: datetime,
    ) -> InventoryItem:
        """Insert an inventory row and return it."""
        response = execute(
            self.client.table(INVENTORY_TABLE).insert(
                {
                    "user_id": user_id,
                    "ingredient_name": ingredient_name,
                    "category": category.value,
                    "added_at": added_at.isoformat(),
                }
            ),
            "add inventory item",
        )
        if not response.data:
            raise StoreError("Failed to add inventory item")
        return _parse_item(response.data[0])

    def delete_item(self, user_id: str, item_id: str) -> bool:
        """Delete an inventory row owned by the user."""
        response = execute(
            self.client.table(INVENTORY_TABLE)
            .delete()
            .eq("id", item_id)
            .eq("user_id", user_id),
            "delete inventory item",
        )
        return bool(response.data)

    def list_items(self, user_id: str) -> list[InventoryItem]:
        """Return the user's items ordered by ``added_at`` descending."""
        response = execute(
            self.client.table(INVENTORY_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("added_at", desc=True),
            "load inventory",
        )
        return [_parse_item(row) for row in response.data or []]


def _parse_item(row: dict[str, object]) -> InventoryItem:
    """Parse an inventory row into a domain model."""
    return InventoryItem(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        ingredient_name=str(row.get("ingredient_name", "")),
        category=IngredientCategory(row.get("category", "other")),
        added_at=parse_timestamp(row.get("added_at")),
    )
