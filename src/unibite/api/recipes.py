"""Recipe generation and saved recipe endpoints."""

from fastapi import APIRouter, Depends, Request, status

from unibite.api.dependencies import get_container, require_session
from unibite.api.models import RecipePayload, SavedRecipeResponse
from unibite.domain.auth import AuthSession

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/generate")
async def generate_recipe(
    request: Request, session: AuthSession = Depends(require_session)
) -> RecipePayload:
    """Generate a recipe from the caller's fridge and pantry staples."""
    recipe = await get_container(request).recipe_service.generate(session.user_id)
    return RecipePayload.from_recipe(recipe)


@router.get("/saved")
async def list_saved_recipes(
    request: Request, session: AuthSession = Depends(require_session)
) -> list[SavedRecipeResponse]:
    """Return the caller's saved recipes, newest first."""
    recipes = get_container(request).recipe_service.list_saved(session.user_id)
    return [SavedRecipeResponse.model_validate(recipe) for recipe in recipes]


@router.post("/saved", status_code=status.HTTP_201_CREATED)
async def save_recipe(
    payload: RecipePayload,
    request: Request,
    session: AuthSession = Depends(require_session),
) -> SavedRecipeResponse:
    """Persist a generated recipe for the caller."""
    saved = get_container(request).recipe_service.save(
        session.user_id, payload.to_recipe()
    )
    return SavedRecipeResponse.model_validate(saved)


@router.delete("/saved/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_recipe(
    recipe_id: str, request: Request, session: AuthSession = Depends(require_session)
) -> None:
    """Delete one of the caller's saved recipes."""
    get_container(request).recipe_service.delete_saved(session.user_id, recipe_id)
