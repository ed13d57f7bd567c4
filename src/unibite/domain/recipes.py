"""Domain models for generated and saved recipes."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class GeneratedRecipe:
    """Transient recipe produced by one generation request."""

    title: object
    time_minutes: object
    ingredients_used: object = field(default_factory=list)
    steps: list[object] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "GeneratedRecipe":
        """Wrap a validated model payload without coercing its values."""
        return cls(
            title=payload["title"],
            time_minutes=payload.get("timeMinutes"),
            ingredients_used=payload.get("ingredientsUsed", []),
            steps=payload["steps"],
        )

    def to_payload(self) -> dict[str, object]:
        """Return the recipe in the model's JSON shape."""
        return {
            "title": self.title,
            "timeMinutes": self.time_minutes,
            "ingredientsUsed": self.ingredients_used,
            "steps": self.steps,
        }


@dataclass(frozen=True)
class SavedRecipe:
    """Persisted copy of a generated recipe."""

    id: str
    user_id: str
    title: object
    time_minutes: object
    ingredients_list: object
    instructions: list[object]
    created_at: datetime
