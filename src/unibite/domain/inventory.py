"""Domain models for the fridge inventory."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class IngredientCategory(StrEnum):
    """Fixed set of categories an inventory item can belong to."""

    VEG = "veg"
    MEAT = "meat"
    DAIRY = "dairy"
    GRAIN = "grain"
    SNACK = "snack"
    OTHER = "other"


@dataclass(frozen=True)
class InventoryItem:
    """Single ingredient entry owned by a user."""

    id: str
    user_id: str
    ingredient_name: str
    category: IngredientCategory
    added_at: datetime
