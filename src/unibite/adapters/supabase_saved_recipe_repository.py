"""Supabase implementation for saved recipes."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from unibite.adapters.supabase_store import execute, parse_timestamp
from unibite.domain.errors import StoreError
from unibite.domain.recipes import GeneratedRecipe, SavedRecipe
from unibite.services.recipes import SavedRecipeRepository

SAVED_RECIPES_TABLE = "saved_recipes"


@dataclass
class SupabaseSavedRecipeRepository(SavedRecipeRepository):
    """Supabase-backed repository for saved recipes."""

    client: Client

    def save_recipe(
        self, user_id: str, recipe: GeneratedRecipe, created_at: datetime
    ) -> SavedRecipe:
        """Insert a saved recipe row and return it."""
        response = execute(
            self.client.table(SAVED_RECIPES_TABLE).insert(
                {
                    "user_id": user_id,
                    "title": recipe.title,
                    "time_minutes": recipe.time_minutes,
                    "ingredients_list": recipe.ingredients_used,
                    "instructions": recipe.steps,
                    "created_at": created_at.isoformat(),
                }
            ),
            "save recipe",
        )
        if not response.data:
            raise StoreError("Failed to save recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, user_id: str, recipe_id: str) -> bool:
        """Delete a saved recipe row owned by the user."""
        response = execute(
            self.client.table(SAVED_RECIPES_TABLE)
            .delete()
            .eq("id", recipe_id)
            .eq("user_id", user_id),
            "delete saved recipe",
        )
        return bool(response.data)

    def list_recipes(self, user_id: str) -> list[SavedRecipe]:
        """Return the user's saved recipes ordered by ``created_at`` descending."""
        response = execute(
            self.client.table(SAVED_RECIPES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True),
            "load saved recipes",
        )
        return [_parse_recipe(row) for row in response.data or []]


def _parse_recipe(row: dict[str, object]) -> SavedRecipe:
    """Parse a saved recipe row into a domain model."""
    return SavedRecipe(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=row.get("title", ""),
        time_minutes=row.get("time_minutes"),
        ingredients_list=row.get("ingredients_list") or [],
        instructions=list(row.get("instructions") or []),
        created_at=parse_timestamp(row.get("created_at")),
    )
