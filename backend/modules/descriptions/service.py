"""
Description service implementation.

Thin wrapper around the OpenAI chat model via langchain-openai: builds
the prompt, calls the model, and re-raises failures with a friendlier
message.
"""

import logging
from typing import Optional

import openai
from langchain_openai import ChatOpenAI

from shared.config import Settings, get_settings
from shared.exceptions import ConfigurationError

from .exceptions import DescriptionGenerationError
from .models import DescriptionRequest, GeneratedDescription
from .prompts import build_description_prompt, build_regeneration_prompt

logger = logging.getLogger(__name__)


class DescriptionService:
    """Generates product copy with an OpenAI chat model."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._llm: Optional[ChatOpenAI] = None

    def get_llm(self) -> ChatOpenAI:
        """
        Return the configured chat model, creating it on first use.

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not set
        """
        if not self._settings.openai_api_key:
            raise ConfigurationError(
                "OpenAI API key is not configured. "
                "Please set the OPENAI_API_KEY environment variable.",
                code="OPENAI_NOT_CONFIGURED",
            )
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self._settings.openai_model,
                api_key=self._settings.openai_api_key,
                temperature=self._settings.openai_temperature,
                max_tokens=self._settings.openai_max_tokens,
            )
        return self._llm

    async def _complete(self, prompt: str, failure_message: str) -> GeneratedDescription:
        llm = self.get_llm()
        try:
            response = await llm.ainvoke(prompt)
        except openai.APIError as e:
            logger.error("OpenAI API error: %s", e.message)
            raise DescriptionGenerationError(f"OpenAI API Error: {e.message}") from e
        except Exception as e:
            logger.exception("Description generation failed")
            raise DescriptionGenerationError(failure_message) from e

        return GeneratedDescription(
            description=str(response.content).strip(),
            model=self._settings.openai_model,
        )

    async def generate(self, request: DescriptionRequest) -> GeneratedDescription:
        prompt = build_description_prompt(request)
        return await self._complete(
            prompt,
            "Failed to generate product description. Please try again later.",
        )

    async def regenerate(
        self,
        previous_description: str,
        feedback: Optional[str] = None,
    ) -> GeneratedDescription:
        prompt = build_regeneration_prompt(previous_description, feedback)
        return await self._complete(
            prompt,
            "Failed to regenerate product description. Please try again later.",
        )
