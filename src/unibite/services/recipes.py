"""Recipe generation and saved-recipe management."""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from unibite.domain.errors import InvalidInputError, NotFoundError
from unibite.domain.recipes import GeneratedRecipe, SavedRecipe
from unibite.services.extraction import parse_generated_recipe
from unibite.services.inventory import InventoryRepository
from unibite.services.subscriptions import (
    ChangeFeed,
    ErrorCallback,
    SnapshotCallback,
    Subscription,
)

logger = logging.getLogger(__name__)

PANTRY_STAPLES: tuple[str, ...] = (
    "salt",
    "pepper",
    "olive oil",
    "vegetable oil",
    "garlic powder",
    "onion powder",
    "dried herbs",
)

RECIPE_SHAPE: dict[str, object] = {
    "title": "string - recipe title",
    "timeMinutes": 20,
    "ingredientsUsed": ["string"],
    "steps": ["string"],
}


class RecipeClient(Protocol):
    """Interface for the generative-text endpoint."""

    async def generate_text(self, prompt: str, temperature: float) -> str:
        """Send one prompt and return the model's raw text."""


class SavedRecipeRepository(Protocol):
    """Persistence interface for saved recipes."""

    def save_recipe(
        self, user_id: str, recipe: GeneratedRecipe, created_at: datetime
    ) -> SavedRecipe:
        """Insert a saved recipe and return it."""

    def delete_recipe(self, user_id: str, recipe_id: str) -> bool:
        """Delete a saved recipe owned by the user. Returns False if missing."""

    def list_recipes(self, user_id: str) -> list[SavedRecipe]:
        """Return the user's saved recipes, newest first."""


def build_recipe_prompt(
    ingredients: Sequence[str], staples: Sequence[str] = PANTRY_STAPLES
) -> str:
    """Build the generation prompt for a set of fridge ingredients."""
    return (
        "You are UniBite, a helpful cooking assistant for university students. "
        "You create simple, budget-friendly recipes using what they already have "
        "in their fridge. "
        "Generate one simple recipe using ONLY from this list of ingredients as "
        "the main components. "
        "You may assume the user also has common pantry staples listed separately. "
        "Prefer quick, low-effort meals suitable for students.\n\n"
        f"Fridge ingredients: {json.dumps(list(ingredients), ensure_ascii=False)}\n"
        f"Pantry staples (always available): "
        f"{json.dumps(list(staples), ensure_ascii=False)}\n\n"
        "Respond with strictly valid JSON in this exact shape, and nothing else:\n"
        f"{json.dumps(RECIPE_SHAPE, indent=2)}"
    )


@dataclass
class RecipeService:
    """Application service for generating, saving and listing recipes."""

    client: RecipeClient
    inventory_repository: InventoryRepository
    repository: SavedRecipeRepository
    staples: Sequence[str] = PANTRY_STAPLES
    temperature: float = 0.6
    feed: ChangeFeed[SavedRecipe] = field(init=False)

    def __post_init__(self) -> None:
        self.feed = ChangeFeed(self.repository.list_recipes)

    async def generate(self, user_id: str) -> GeneratedRecipe:
        """Generate a recipe from the user's current inventory."""
        inventory = self.inventory_repository.list_items(user_id)
        if not inventory:
            raise InvalidInputError(
                "Add a few ingredients to your fridge first so UniBite can "
                "build a recipe."
            )
        return await self.generate_from_ingredients(
            [item.ingredient_name for item in inventory]
        )

    async def generate_from_ingredients(
        self, ingredients: Sequence[str]
    ) -> GeneratedRecipe:
        """Generate a recipe from an explicit ingredient list."""
        if not ingredients:
            raise InvalidInputError("At least one ingredient is required.")
        prompt = build_recipe_prompt(ingredients, self.staples)
        logger.info("Requesting recipe for %d ingredients", len(ingredients))
        raw_text = await self.client.generate_text(prompt, self.temperature)
        return parse_generated_recipe(raw_text)

    def save(self, user_id: str, recipe: GeneratedRecipe) -> SavedRecipe:
        """Persist a generated recipe for the user."""
        saved = self.repository.save_recipe(
            user_id, recipe, created_at=datetime.now(tz=UTC)
        )
        logger.info("Saved recipe %s for user %s", saved.id, user_id)
        self.feed.publish(user_id)
        return saved

    def delete_saved(self, user_id: str, recipe_id: str) -> None:
        """Delete one of the user's saved recipes."""
        if not self.repository.delete_recipe(user_id, recipe_id):
            raise NotFoundError("Saved recipe not found.")
        self.feed.publish(user_id)

    def list_saved(self, user_id: str) -> list[SavedRecipe]:
        """Return the user's saved recipes."""
        return self.repository.list_recipes(user_id)

    def subscribe(
        self, user_id: str, on_items: SnapshotCallback, on_error: ErrorCallback
    ) -> Subscription:
        """Subscribe to the user's saved-recipe snapshots."""
        return self.feed.subscribe(user_id, on_items, on_error)


def parse_staples(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated staples override, falling back to defaults."""
    if raw is None:
        return PANTRY_STAPLES
    staples = tuple(chunk.strip() for chunk in raw.split(",") if chunk.strip())
    return staples or PANTRY_STAPLES
