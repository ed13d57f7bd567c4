"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from unibite.adapters.gemini_client import HttpxGeminiClient
from unibite.adapters.supabase_identity_gateway import SupabaseIdentityGateway
from unibite.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from unibite.adapters.supabase_saved_recipe_repository import (
    SupabaseSavedRecipeRepository,
)
from unibite.config import Settings
from unibite.services.auth import AuthService
from unibite.services.inventory import InventoryService
from unibite.services.recipes import RecipeService, parse_staples


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    inventory_service: InventoryService
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    data_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    inventory_repository = SupabaseInventoryRepository(data_client)
    saved_recipe_repository = SupabaseSavedRecipeRepository(data_client)
    gemini_client = HttpxGeminiClient.create(
        api_key=resolved_settings.gemini_api_key,
        model=resolved_settings.gemini_model,
        base_url=resolved_settings.gemini_base_url,
    )
    auth_service = AuthService(SupabaseIdentityGateway(auth_client))
    inventory_service = InventoryService(inventory_repository)
    recipe_service = RecipeService(
        client=gemini_client,
        inventory_repository=inventory_repository,
        repository=saved_recipe_repository,
        staples=parse_staples(resolved_settings.pantry_staples),
        temperature=resolved_settings.gemini_temperature,
    )

    async def close_resources() -> None:
        await gemini_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        inventory_service=inventory_service,
        recipe_service=recipe_service,
        close_resources=close_resources,
    )
