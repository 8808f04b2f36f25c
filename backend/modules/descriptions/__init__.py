"""
Descriptions module.

Generates e-commerce product copy with an OpenAI model.

Public API:
- IDescriptionService: Interface for copy generation
- DescriptionRequest, BrandProfile, GeneratedDescription: Models
- build_description_prompt, build_regeneration_prompt: Prompt builders
- DescriptionGenerationError: Raised when the model call fails
"""

from .interfaces import IDescriptionService
from .models import (
    BrandProfile,
    DescriptionRequest,
    RegenerationRequest,
    GeneratedDescription,
)
from .prompts import build_description_prompt, build_regeneration_prompt
from .exceptions import DescriptionGenerationError

__all__ = [
    # Interface
    "IDescriptionService",
    # Models
    "BrandProfile",
    "DescriptionRequest",
    "RegenerationRequest",
    "GeneratedDescription",
    # Prompts
    "build_description_prompt",
    "build_regeneration_prompt",
    # Exceptions
    "DescriptionGenerationError",
]
