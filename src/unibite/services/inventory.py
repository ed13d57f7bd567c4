"""Services for managing a user's fridge inventory."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from unibite.domain.errors import InvalidInputError, NotFoundError
from unibite.domain.inventory import IngredientCategory, InventoryItem
from unibite.services.subscriptions import (
    ChangeFeed,
    ErrorCallback,
    SnapshotCallback,
    Subscription,
)

logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for inventory items."""

    def add_item(
        self,
        user_id: str,
        ingredient_name: str,
        category: IngredientCategory,
        added_at: datetime,
    ) -> InventoryItem:
        """Insert an item and return it with its store-assigned id."""

    def delete_item(self, user_id: str, item_id: str) -> bool:
        """Delete an item owned by the user. Returns False if nothing matched."""

    def list_items(self, user_id: str) -> list[InventoryItem]:
        """Return the user's items, most recently added first."""


@dataclass
class InventoryService:
    """Application service for inventory CRUD and subscriptions."""

    repository: InventoryRepository
    feed: ChangeFeed[InventoryItem] = field(init=False)

    def __post_init__(self) -> None:
        self.feed = ChangeFeed(self.repository.list_items)

    def add_item(
        self, user_id: str, ingredient_name: str, category: str = "other"
    ) -> InventoryItem:
        """Validate and store a new ingredient for the user."""
        name = ingredient_name.strip()
        if not name:
            raise InvalidInputError("Please enter an ingredient name.")
        item = self.repository.add_item(
            user_id,
            name,
            parse_category(category),
            added_at=datetime.now(tz=UTC),
        )
        logger.info("Added inventory item %s for user %s", item.id, user_id)
        self.feed.publish(user_id)
        return item

    def delete_item(self, user_id: str, item_id: str) -> None:
        """Delete one of the user's items."""
        if not self.repository.delete_item(user_id, item_id):
            raise NotFoundError("Ingredient not found.")
        self.feed.publish(user_id)

    def list_items(self, user_id: str) -> list[InventoryItem]:
        """Return the user's current inventory."""
        return self.repository.list_items(user_id)

    def subscribe(
        self, user_id: str, on_items: SnapshotCallback, on_error: ErrorCallback
    ) -> Subscription:
        """Subscribe to the user's inventory snapshots."""
        return self.feed.subscribe(user_id, on_items, on_error)


def parse_category(value: str | IngredientCategory) -> IngredientCategory:
    """Return the category for ``value`` or raise if it is not one of the six."""
    try:
        return IngredientCategory(value)
    except ValueError as exc:
        allowed = ", ".join(category.value for category in IngredientCategory)
        raise InvalidInputError(
            f"Unknown category '{value}'. Expected one of: {allowed}."
        ) from exc
