"""Account endpoints."""

from fastapi import APIRouter, Depends, Request, status

from unibite.api.dependencies import bearer_token, get_container, require_session
from unibite.api.models import LoginRequest, SessionResponse, SignUpRequest
from unibite.domain.auth import AuthSession

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(payload: SignUpRequest, request: Request) -> dict[str, object]:
    """Create an account and ask the user to verify their email."""
    container = get_container(request)
    session = container.auth_service.sign_up(
        payload.username, payload.email, payload.password
    )
    return {
        "user_id": session.user_id,
        "message": (
            "Account created! We have sent a verification link to your email. "
            "Please verify it before logging in."
        ),
    }


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> SessionResponse:
    """Sign in with email and password."""
    container = get_container(request)
    session = container.auth_service.sign_in(payload.email, payload.password)
    return SessionResponse.model_validate(session)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request, token: str = Depends(bearer_token)) -> None:
    """Sign the current session out."""
    get_container(request).auth_service.sign_out(token)


@router.get("/me")
async def me(session: AuthSession = Depends(require_session)) -> SessionResponse:
    """Return the current session."""
    return SessionResponse.model_validate(session)
