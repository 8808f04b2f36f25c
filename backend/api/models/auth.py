"""
Request models for the auth endpoints.

Profile updates reuse modules.auth.ProfileUpdate directly.
"""

from pydantic import BaseModel
from typing import Optional


class LoginRequest(BaseModel):
    """Email/password sign-in. Empty values are rejected by the auth context."""
    email: str = ""
    password: str = ""


class SignupRequest(BaseModel):
    """New account."""
    email: str = ""
    password: str = ""
    name: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    """Password reset notice."""
    email: str = ""


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str
