"""Shared test fixtures."""

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

import pytest

from unibite.config import Settings
from unibite.containers import AppContainer
from unibite.domain.auth import AuthSession
from unibite.domain.errors import AuthError
from unibite.domain.inventory import IngredientCategory, InventoryItem
from unibite.domain.recipes import GeneratedRecipe, SavedRecipe
from unibite.services.auth import AuthService, IdentityGateway
from unibite.services.inventory import InventoryRepository, InventoryService
from unibite.services.recipes import (
    RecipeClient,
    RecipeService,
    SavedRecipeRepository,
)

TOAST_RESPONSE = (
    '```json\n{"title":"Toast","timeMinutes":5,'
    '"ingredientsUsed":["bread"],"steps":["Toast it"]}\n```'
)


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory inventory repository ordered like the store query."""

    items: dict[str, tuple[int, InventoryItem]] = field(default_factory=dict)
    sequence: itertools.count = field(default_factory=itertools.count)
    fail_reads: Exception | None = None

    def add_item(
        self,
        user_id: str,
        ingredient_name: str,
        category: IngredientCategory,
        added_at: datetime,
    ) -> InventoryItem:
        item = InventoryItem(
            id=str(uuid4()),
            user_id=user_id,
            ingredient_name=ingredient_name,
            category=category,
            added_at=added_at,
        )
        self.items[item.id] = (next(self.sequence), item)
        return item

    def delete_item(self, user_id: str, item_id: str) -> bool:
        entry = self.items.get(item_id)
        if entry is None or entry[1].user_id != user_id:
            return False
        del self.items[item_id]
        return True

    def list_items(self, user_id: str) -> list[InventoryItem]:
        if self.fail_reads is not None:
            raise self.fail_reads
        rows = [entry for entry in self.items.values() if entry[1].user_id == user_id]
        rows.sort(key=lambda entry: (entry[1].added_at, entry[0]), reverse=True)
        return [item for _, item in rows]


@dataclass
class InMemorySavedRecipeRepository(SavedRecipeRepository):
    """In-memory saved recipe repository ordered like the store query."""

    recipes: dict[str, tuple[int, SavedRecipe]] = field(default_factory=dict)
    sequence: itertools.count = field(default_factory=itertools.count)

    def save_recipe(
        self, user_id: str, recipe: GeneratedRecipe, created_at: datetime
    ) -> SavedRecipe:
        saved = SavedRecipe(
            id=str(uuid4()),
            user_id=user_id,
            title=recipe.title,
            time_minutes=recipe.time_minutes,
            ingredients_list=recipe.ingredients_used,
            instructions=list(recipe.steps),
            created_at=created_at,
        )
        self.recipes[saved.id] = (next(self.sequence), saved)
        return saved

    def delete_recipe(self, user_id: str, recipe_id: str) -> bool:
        entry = self.recipes.get(recipe_id)
        if entry is None or entry[1].user_id != user_id:
            return False
        del self.recipes[recipe_id]
        return True

    def list_recipes(self, user_id: str) -> list[SavedRecipe]:
        rows = [entry for entry in self.recipes.values() if entry[1].user_id == user_id]
        rows.sort(key=lambda entry: (entry[1].created_at, entry[0]), reverse=True)
        return [recipe for _, recipe in rows]


@dataclass
class _Account:
    user_id: str
    password: str
    display_name: str
    verified: bool = False


@dataclass
class FakeIdentityGateway(IdentityGateway):
    """Identity gateway that keeps accounts and tokens in memory."""

    accounts: dict[str, _Account] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    signed_out: list[str] = field(default_factory=list)

    def sign_up(self, email: str, password: str, display_name: str) -> AuthSession:
        if email in self.accounts:
            raise AuthError("User already registered")
        account = _Account(
            user_id=str(uuid4()), password=password, display_name=display_name
        )
        self.accounts[email] = account
        return self._session(email, account, access_token=None)

    def sign_in(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account.password != password:
            raise AuthError("Invalid login credentials")
        token = f"token-{uuid4()}"
        self.tokens[token] = email
        return self._session(email, account, access_token=token)

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.tokens.pop(access_token, None)

    def get_session(self, access_token: str) -> AuthSession | None:
        email = self.tokens.get(access_token)
        if email is None:
            return None
        return self._session(email, self.accounts[email], access_token=access_token)

    def verify(self, email: str) -> None:
        self.accounts[email].verified = True

    def issue_token(self, email: str) -> str:
        """Create a verified account if needed and return a live token."""
        if email not in self.accounts:
            self.sign_up(email, "secret", display_name=email.split("@")[0])
        self.verify(email)
        return self.sign_in(email, self.accounts[email].password).access_token

    @staticmethod
    def _session(
        email: str, account: _Account, access_token: str | None
    ) -> AuthSession:
        return AuthSession(
            user_id=account.user_id,
            email=email,
            email_verified=account.verified,
            display_name=account.display_name,
            access_token=access_token,
        )


@dataclass
class FakeRecipeClient(RecipeClient):
    """Recipe client returning canned model text."""

    response_text: str = TOAST_RESPONSE
    error: Exception | None = None
    prompts: list[tuple[str, float]] = field(default_factory=list)

    async def generate_text(self, prompt: str, temperature: float) -> str:
        self.prompts.append((prompt, temperature))
        if self.error is not None:
            raise self.error
        return self.response_text


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="header.payload.signature",
        gemini_api_key="gemini-key",
    )


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def saved_recipe_repository() -> InMemorySavedRecipeRepository:
    return InMemorySavedRecipeRepository()


@pytest.fixture
def identity_gateway() -> FakeIdentityGateway:
    return FakeIdentityGateway()


@pytest.fixture
def recipe_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
def container(
    settings: Settings,
    inventory_repository: InMemoryInventoryRepository,
    saved_recipe_repository: InMemorySavedRecipeRepository,
    identity_gateway: FakeIdentityGateway,
    recipe_client: FakeRecipeClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(identity_gateway),
        inventory_service=InventoryService(inventory_repository),
        recipe_service=RecipeService(
            client=recipe_client,
            inventory_repository=inventory_repository,
            repository=saved_recipe_repository,
        ),
        close_resources=close_resources,
    )
