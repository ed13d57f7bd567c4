"""Domain models for identity sessions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthSession:
    """Signed-in session as reported by the identity provider."""

    user_id: str
    email: str | None
    email_verified: bool
    display_name: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
