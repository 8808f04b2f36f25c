"""
Base exception classes for the Copywise backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class CopywiseError(Exception):
    """
    Base exception for all Copywise errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(CopywiseError):
    """Input validation failed."""

    pass


class AuthenticationError(CopywiseError):
    """Authentication failed (missing or invalid session)."""

    pass


class StorageError(CopywiseError):
    """Reading or writing persisted state failed."""

    pass


class ConfigurationError(CopywiseError):
    """A required setting (usually a vendor credential) is missing."""

    pass


class ExternalServiceError(CopywiseError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
