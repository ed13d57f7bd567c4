"""Account sign-up, sign-in and session checks."""

import logging
from dataclasses import dataclass
from typing import Protocol

from unibite.domain.auth import AuthSession
from unibite.domain.errors import AuthError, EmailNotVerifiedError, InvalidInputError

logger = logging.getLogger(__name__)


class IdentityGateway(Protocol):
    """Interface for the third-party identity provider."""

    def sign_up(self, email: str, password: str, display_name: str) -> AuthSession:
        """Create an account; the provider sends the verification email."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Verify credentials and return the new session."""

    def sign_out(self, access_token: str) -> None:
        """Invalidate the session behind ``access_token``."""

    def get_session(self, access_token: str) -> AuthSession | None:
        """Resolve an access token, or return None if it is not valid."""


@dataclass
class AuthService:
    """Application service for account lifecycle actions."""

    gateway: IdentityGateway

    def sign_up(self, username: str, email: str, password: str) -> AuthSession:
        """Create an account that must be verified before logging in."""
        if not username or not email or not password:
            raise InvalidInputError("Please fill out all fields.")
        session = self.gateway.sign_up(email, password, display_name=username)
        logger.info("Created account %s; awaiting email verification", session.user_id)
        return session

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in, rejecting accounts whose email is not verified."""
        if not email or not password:
            raise InvalidInputError("Please enter your email and password.")
        session = self.gateway.sign_in(email, password)
        if not session.email_verified:
            if session.access_token:
                self.gateway.sign_out(session.access_token)
            raise EmailNotVerifiedError()
        return session

    def sign_out(self, access_token: str) -> None:
        """End the session behind ``access_token``."""
        self.gateway.sign_out(access_token)

    def current_session(self, access_token: str) -> AuthSession:
        """Return the verified session for a token."""
        session = self.gateway.get_session(access_token)
        if session is None:
            raise AuthError("Invalid or expired token")
        if not session.email_verified:
            raise EmailNotVerifiedError()
        return session
