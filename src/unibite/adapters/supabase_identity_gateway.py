"""Supabase auth implementation of the identity gateway."""

import logging
from dataclasses import dataclass

from supabase import Client

from unibite.domain.auth import AuthSession
from unibite.domain.errors import AuthError, EmailNotVerifiedError
from unibite.services.auth import IdentityGateway

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityGateway(IdentityGateway):
    """Identity gateway backed by Supabase auth.

    ``client`` should be dedicated to auth calls: signing in stores the user's
    session on the client and would otherwise change the key used for table
    access.
    """

    client: Client

    def sign_up(self, email: str, password: str, display_name: str) -> AuthSession:
        """Register a user; Supabase sends the confirmation email."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"display_name": display_name}},
                }
            )
        except Exception as exc:
            logger.warning("Sign-up failed: %s", exc)
            raise AuthError(str(exc)) from exc
        if response.user is None:
            raise AuthError("Sign-up did not return a user")
        return _to_session(response.user, response.session)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            logger.warning("Sign-in failed: %s", exc)
            if _email_not_confirmed(exc):
                raise EmailNotVerifiedError() from exc
            raise AuthError(str(exc)) from exc
        if response.user is None:
            raise AuthError("Invalid login credentials")
        return _to_session(response.user, response.session)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        try:
            self.client.auth.admin.sign_out(access_token)
        except Exception as exc:
            logger.warning("Sign-out failed: %s", exc)
            raise AuthError(str(exc)) from exc

    def get_session(self, access_token: str) -> AuthSession | None:
        """Resolve a JWT to its user, or None when it is invalid."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as exc:
            logger.warning("Auth validation failed: %s", exc)
            return None
        if not response or not response.user:
            return None
        return _to_session(response.user, None, access_token=access_token)


def _to_session(user, session, access_token: str | None = None) -> AuthSession:  # type: ignore[no-untyped-def]
    """Map Supabase user/session objects to an ``AuthSession``."""
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthSession(
        user_id=str(user.id),
        email=user.email,
        email_verified=getattr(user, "email_confirmed_at", None) is not None,
        display_name=metadata.get("display_name"),
        access_token=session.access_token if session else access_token,
        refresh_token=session.refresh_token if session else None,
    )


def _email_not_confirmed(exc: Exception) -> bool:
    """Supabase rejects unconfirmed sign-ins with ``email_not_confirmed``."""
    if getattr(exc, "code", None) == "email_not_confirmed":
        return True
    return "email not confirmed" in str(exc).lower()
