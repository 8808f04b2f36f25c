"""
Description module interface.

API routes depend on IDescriptionService so tests can swap in a fake
that never reaches OpenAI.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import DescriptionRequest, GeneratedDescription


@runtime_checkable
class IDescriptionService(Protocol):
    """Interface for product copy generation."""

    async def generate(self, request: DescriptionRequest) -> GeneratedDescription:
        """
        Write a description for a product.

        Raises:
            ConfigurationError: If no OpenAI API key is configured
            DescriptionGenerationError: If the model call fails
        """
        ...

    async def regenerate(
        self,
        previous_description: str,
        feedback: Optional[str] = None,
    ) -> GeneratedDescription:
        """Rewrite an existing description, optionally guided by feedback."""
        ...
