"""Error taxonomy shared by services, adapters and the HTTP boundary."""


class UniBiteError(Exception):
    """Base class for errors that are shown to the user as a message."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(UniBiteError):
    """A required credential or setting is missing."""

    status_code = 503


class RecipeRequestError(UniBiteError):
    """The generative-text endpoint answered with a non-success status."""

    status_code = 502

    def __init__(self, body: str, upstream_status: int | None = None) -> None:
        super().__init__(f"AI request failed: {body}")
        self.body = body
        self.upstream_status = upstream_status


class RecipeFormatError(UniBiteError):
    """Model output could not be read as JSON."""

    status_code = 502


class RecipeValidationError(UniBiteError):
    """Model output parsed but lacks required recipe fields."""

    status_code = 502


class StoreError(UniBiteError):
    """The document store rejected or failed an operation."""

    status_code = 502


class AuthError(UniBiteError):
    """The identity provider rejected the credentials or token."""

    status_code = 401


class EmailNotVerifiedError(AuthError):
    """The account exists but its email address is not verified yet."""

    status_code = 403

    def __init__(self) -> None:
        super().__init__(
            "Please check your inbox and verify your email before logging in."
        )


class InvalidInputError(UniBiteError):
    """User input is missing or malformed."""

    status_code = 400


class NotFoundError(UniBiteError):
    """The requested record does not exist for this user."""

    status_code = 404
