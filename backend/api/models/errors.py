"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Any


class ErrorResponse(BaseModel):
    """Standard error response format (mirrors CopywiseError.to_dict)."""

    error: str
    message: str
    details: dict[str, Any] = {}
