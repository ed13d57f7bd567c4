"""Fridge inventory endpoints."""

from fastapi import APIRouter, Depends, Request, status

from unibite.api.dependencies import get_container, require_session
from unibite.api.models import InventoryItemCreate, InventoryItemResponse
from unibite.domain.auth import AuthSession

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("")
async def list_inventory(
    request: Request, session: AuthSession = Depends(require_session)
) -> list[InventoryItemResponse]:
    """Return the caller's inventory, newest first."""
    items = get_container(request).inventory_service.list_items(session.user_id)
    return [InventoryItemResponse.model_validate(item) for item in items]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_inventory_item(
    payload: InventoryItemCreate,
    request: Request,
    session: AuthSession = Depends(require_session),
) -> InventoryItemResponse:
    """Add an ingredient to the caller's fridge."""
    item = get_container(request).inventory_service.add_item(
        session.user_id, payload.ingredient_name, payload.category
    )
    return InventoryItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_item(
    item_id: str, request: Request, session: AuthSession = Depends(require_session)
) -> None:
    """Remove an ingredient from the caller's fridge."""
    get_container(request).inventory_service.delete_item(session.user_id, item_id)
