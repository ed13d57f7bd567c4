"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from unibite.api.auth import router as auth_router
from unibite.api.inventory import router as inventory_router
from unibite.api.recipes import router as recipes_router
from unibite.api.websocket import router as websocket_router
from unibite.app_logging import configure_logging
from unibite.containers import AppContainer
from unibite.domain.errors import UniBiteError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="UniBite", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(UniBiteError)
    async def handle_unibite_error(request: Request, exc: UniBiteError) -> JSONResponse:
        logger.warning(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(auth_router)
    app.include_router(inventory_router)
    app.include_router(recipes_router)
    app.include_router(websocket_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
