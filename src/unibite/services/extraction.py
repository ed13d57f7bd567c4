"""Best-effort extraction of a recipe object from raw model text.

Models usually answer with a bare JSON object, but sometimes wrap it in a
Markdown code fence or surround it with prose. The slice taken here runs from
the first ``{`` to the last ``}``; that is a heuristic, not a JSON scanner, and
it will mis-slice output with several top-level objects or braces inside
strings. Only the common single-object case is expected to succeed.
"""

import json
import re

from unibite.domain.errors import RecipeFormatError, RecipeValidationError
from unibite.domain.recipes import GeneratedRecipe

_LEADING_FENCE = re.compile(r"^```(?:json)?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```$")


def strip_fences(raw_text: str) -> str:
    """Trim whitespace and a surrounding Markdown code fence."""
    cleaned = raw_text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def slice_json_object(text: str) -> str:
    """Return text between the first ``{`` and last ``}``, or ``text`` as is."""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        return text[start : end + 1]
    return text


def extract_recipe_payload(raw_text: str) -> dict[str, object]:
    """Parse and validate the recipe object contained in ``raw_text``."""
    candidate = slice_json_object(strip_fences(raw_text))
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise RecipeFormatError("Failed to parse AI response as JSON.") from exc

    if (
        not isinstance(parsed, dict)
        or not parsed.get("title")
        or not isinstance(parsed.get("steps"), list)
    ):
        raise RecipeValidationError("AI response is missing required fields.")
    return parsed


def parse_generated_recipe(raw_text: str) -> GeneratedRecipe:
    """Extract a ``GeneratedRecipe`` from raw model text."""
    return GeneratedRecipe.from_payload(extract_recipe_payload(raw_text))
