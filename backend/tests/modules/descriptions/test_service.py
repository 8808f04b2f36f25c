"""Tests for the description service."""

import httpx
import openai
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from modules.descriptions.exceptions import DescriptionGenerationError
from modules.descriptions.models import DescriptionRequest
from modules.descriptions.service import DescriptionService
from shared.config import Settings
from shared.exceptions import ConfigurationError


def make_settings(**overrides) -> Settings:
    values = {"openai_api_key": "sk-test", "openai_model": "gpt-4o-mini"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_llm(content: str = "  Great copy.  ") -> MagicMock:
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=MagicMock(content=content))
    return llm


class TestDescriptionService:
    def test_missing_api_key(self):
        """Should refuse to build a client without an API key."""
        service = DescriptionService(make_settings(openai_api_key=""))
        with pytest.raises(ConfigurationError) as exc_info:
            service.get_llm()
        assert "OPENAI_API_KEY" in exc_info.value.message

    @patch("modules.descriptions.service.ChatOpenAI")
    def test_get_llm_uses_settings(self, mock_chat_openai):
        service = DescriptionService(make_settings(openai_temperature=0.2, openai_max_tokens=300))
        service.get_llm()
        mock_chat_openai.assert_called_once_with(
            model="gpt-4o-mini",
            api_key="sk-test",
            temperature=0.2,
            max_tokens=300,
        )

    @patch("modules.descriptions.service.ChatOpenAI")
    def test_get_llm_is_cached(self, mock_chat_openai):
        service = DescriptionService(make_settings())
        assert service.get_llm() is service.get_llm()
        mock_chat_openai.assert_called_once()

    @pytest.mark.asyncio
    @patch("modules.descriptions.service.ChatOpenAI")
    async def test_generate_returns_trimmed_text(self, mock_chat_openai):
        llm = make_llm()
        mock_chat_openai.return_value = llm
        service = DescriptionService(make_settings())

        result = await service.generate(DescriptionRequest(product_name="Trail Mug"))

        assert result.description == "Great copy."
        assert result.model == "gpt-4o-mini"
        prompt = llm.ainvoke.await_args.args[0]
        assert '"Trail Mug"' in prompt

    @pytest.mark.asyncio
    @patch("modules.descriptions.service.ChatOpenAI")
    async def test_regenerate_sends_feedback(self, mock_chat_openai):
        llm = make_llm("Better copy.")
        mock_chat_openai.return_value = llm
        service = DescriptionService(make_settings())

        result = await service.regenerate("Old copy.", "Shorter")

        assert result.description == "Better copy."
        prompt = llm.ainvoke.await_args.args[0]
        assert "Old copy." in prompt
        assert "Consider this feedback: Shorter" in prompt

    @pytest.mark.asyncio
    @patch("modules.descriptions.service.ChatOpenAI")
    async def test_api_error_is_wrapped(self, mock_chat_openai):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=openai.APIError(
            "Rate limit reached",
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"),
            body=None,
        ))
        mock_chat_openai.return_value = llm
        service = DescriptionService(make_settings())

        with pytest.raises(DescriptionGenerationError) as exc_info:
            await service.generate(DescriptionRequest(product_name="Trail Mug"))
        assert exc_info.value.message == "OpenAI API Error: Rate limit reached"
        assert exc_info.value.service == "openai"

    @pytest.mark.asyncio
    @patch("modules.descriptions.service.ChatOpenAI")
    async def test_other_errors_get_friendly_message(self, mock_chat_openai):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=ConnectionError("reset by peer"))
        mock_chat_openai.return_value = llm
        service = DescriptionService(make_settings())

        with pytest.raises(DescriptionGenerationError) as exc_info:
            await service.regenerate("Old copy.")
        assert exc_info.value.message == (
            "Failed to regenerate product description. Please try again later."
        )
