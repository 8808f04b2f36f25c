"""
Authentication module exceptions.

These exceptions are raised by the auth context and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Any, Optional

from shared.exceptions import (
    AuthenticationError,
    ExternalServiceError,
    ValidationError,
)


class MissingCredentialsError(ValidationError):
    """Raised when a required login/signup/reset field is empty."""

    def __init__(self, message: str = "Email and password are required"):
        super().__init__(message, code="MISSING_CREDENTIALS")


class InvalidProfileUpdateError(ValidationError):
    """Raised when a profile update payload or the merged record is invalid."""

    def __init__(self, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(
            "Invalid profile update",
            code="INVALID_PROFILE_UPDATE",
            details={"errors": errors or []},
        )


class NotAuthenticatedError(AuthenticationError):
    """Raised when an operation requires a signed-in user and there is none."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class AuthProviderError(ExternalServiceError):
    """Raised when the identity provider (e.g. Google sign-in) fails."""

    def __init__(self, message: str, provider: str = "google"):
        super().__init__(
            message,
            service=provider,
            code="AUTH_PROVIDER_ERROR",
        )
