"""API models package."""

from .auth import LoginRequest, SignupRequest, ResetPasswordRequest, MessageResponse
from .errors import ErrorResponse

__all__ = [
    "LoginRequest",
    "SignupRequest",
    "ResetPasswordRequest",
    "MessageResponse",
    "ErrorResponse",
]
