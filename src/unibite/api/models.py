"""Request and response models for the HTTP API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from unibite.domain.inventory import IngredientCategory
from unibite.domain.recipes import GeneratedRecipe


class SignUpRequest(BaseModel):
    """Payload for creating an account."""

    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    """Payload for signing in."""

    email: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    """Session details returned after sign-up or sign-in."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    email: str | None
    email_verified: bool
    display_name: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None


class InventoryItemCreate(BaseModel):
    """Payload for adding an ingredient."""

    ingredient_name: str
    category: str = IngredientCategory.OTHER.value


class InventoryItemResponse(BaseModel):
    """Inventory item as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    ingredient_name: str
    category: IngredientCategory
    added_at: datetime


class RecipePayload(BaseModel):
    """Generated recipe in the model's JSON shape."""

    model_config = ConfigDict(populate_by_name=True)

    title: Any
    time_minutes: Any = Field(default=None, alias="timeMinutes")
    ingredients_used: Any = Field(default_factory=list, alias="ingredientsUsed")
    steps: list[Any]

    @field_validator("title")
    @classmethod
    def _title_present(cls, value: Any) -> Any:
        if not value:
            raise ValueError("title must not be empty")
        return value

    @classmethod
    def from_recipe(cls, recipe: GeneratedRecipe) -> "RecipePayload":
        """Build the payload from a domain recipe."""
        return cls.model_validate(recipe.to_payload())

    def to_recipe(self) -> GeneratedRecipe:
        """Convert back to the domain recipe."""
        return GeneratedRecipe(
            title=self.title,
            time_minutes=self.time_minutes,
            ingredients_used=self.ingredients_used,
            steps=self.steps,
        )


class SavedRecipeResponse(BaseModel):
    """Saved recipe as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: Any
    time_minutes: Any = None
    ingredients_list: Any
    instructions: list[Any]
    created_at: datetime
