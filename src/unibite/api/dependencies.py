"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from unibite.domain.auth import AuthSession  # noqa: TC001

if TYPE_CHECKING:
    from unibite.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Extract the access token from an ``Authorization: Bearer`` header."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
        )
    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization format",
        )
    return authorization.removeprefix("Bearer ")


def require_session(
    request: Request, authorization: str | None = Header(default=None)
) -> AuthSession:
    """Resolve the caller's verified session from the bearer token."""
    token = bearer_token(authorization)
    container = get_container(request)
    return container.auth_service.current_session(token)
