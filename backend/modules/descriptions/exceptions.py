"""Description module exceptions."""

from shared.exceptions import ExternalServiceError


class DescriptionGenerationError(ExternalServiceError):
    """Raised when the language model call fails."""

    def __init__(self, message: str):
        super().__init__(message, service="openai", code="DESCRIPTION_GENERATION_FAILED")
