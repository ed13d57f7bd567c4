"""WebSocket endpoint streaming inventory and saved-recipe snapshots."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from unibite.api.models import InventoryItemResponse, SavedRecipeResponse
from unibite.domain.errors import AuthError
from unibite.services.subscriptions import SubscriptionScope

if TYPE_CHECKING:
    from unibite.containers import AppContainer

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])

COLLECTIONS: dict[str, type[BaseModel]] = {
    "inventory": InventoryItemResponse,
    "saved_recipes": SavedRecipeResponse,
}


@router.websocket("/ws")
async def websocket_updates(websocket: WebSocket, token: str = Query(...)) -> None:
    """Stream collection snapshots to a client.

    Authentication is via the ``token`` query parameter. Clients send
    ``{"subscribe": "<collection>"}`` or ``{"unsubscribe": "<collection>"}``;
    each snapshot arrives as ``{"collection": ..., "items": [...]}`` and store
    failures as ``{"collection": ..., "error": "..."}``.
    """
    container: AppContainer = websocket.app.state.container
    try:
        session = container.auth_service.current_session(token)
    except AuthError as exc:
        await websocket.close(code=4001, reason=exc.message)
        return

    await websocket.accept()
    logger.info("WebSocket connected: user=%s", session.user_id)
    loop = asyncio.get_running_loop()
    outbox: asyncio.Queue[dict[str, object]] = asyncio.Queue()
    scope = SubscriptionScope()
    scope.bind(session.user_id)

    def push(message: dict[str, object]) -> None:
        loop.call_soon_threadsafe(outbox.put_nowait, message)

    def subscribe(collection: str) -> None:
        model = COLLECTIONS[collection]
        service = (
            container.inventory_service
            if collection == "inventory"
            else container.recipe_service
        )
        scope.attach(
            collection,
            service.subscribe(
                session.user_id,
                lambda items: push(
                    {
                        "collection": collection,
                        "items": [
                            model.model_validate(item).model_dump(mode="json")
                            for item in items
                        ],
                    }
                ),
                lambda error: push({"collection": collection, "error": str(error)}),
            ),
        )

    async def forward() -> None:
        while True:
            message = await outbox.get()
            await websocket.send_json(message)

    sender = asyncio.create_task(forward())
    try:
        while True:
            try:
                data = json.loads(await websocket.receive_text())
            except json.JSONDecodeError:
                push({"error": "Expected a JSON object"})
                continue
            if not isinstance(data, dict):
                push({"error": "Expected a JSON object"})
                continue
            if "subscribe" in data:
                collection = data["subscribe"]
                if not isinstance(collection, str) or collection not in COLLECTIONS:
                    push({"error": f"Unknown collection: {collection}"})
                    continue
                subscribe(collection)
            elif "unsubscribe" in data:
                collection = data["unsubscribe"]
                if not isinstance(collection, str):
                    push({"error": f"Unknown collection: {collection}"})
                    continue
                scope.detach(collection)
    except WebSocketDisconnect:
        logger.info("WebSocket disconnected: user=%s", session.user_id)
    finally:
        scope.close()
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            try:
                await sender
            except Exception:
                logger.exception("WebSocket sender failed: user=%s", session.user_id)
