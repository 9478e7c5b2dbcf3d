"""Tests for the LLM provider factory and the Gemini/OpenAI adapters."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from google.api_core import exceptions as google_exceptions

from eletters.config.models import ProviderSettings
from eletters.llm import create_llm_provider, provider_label
from eletters.llm.gemini import GeminiProvider
from eletters.llm.models import LLMConfig, LLMError
from eletters.llm.openai_adapter import OpenAIProvider


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestCreateLLMProvider:
    @patch.dict(os.environ, {"GEMINI_API_KEY": "gem-key"})
    @patch("eletters.llm.gemini.genai")
    def test_creates_gemini(self, mock_genai):
        provider = create_llm_provider(ProviderSettings())
        assert isinstance(provider, GeminiProvider)
        mock_genai.configure.assert_called_once_with(api_key="gem-key")
        mock_genai.GenerativeModel.assert_called_once_with("gemini-1.5-flash")

    @patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"})
    @patch("eletters.llm.openai_adapter.AsyncOpenAI")
    def test_creates_openai_single_attempt(self, mock_cls):
        settings = ProviderSettings(provider="openai", model="gpt-4.1-mini", api_key_env="OPENAI_API_KEY", timeout=12)
        provider = create_llm_provider(settings)
        assert isinstance(provider, OpenAIProvider)
        mock_cls.assert_called_once_with(api_key="sk-test", timeout=12, max_retries=0)

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_key(self):
        with pytest.raises(ValueError, match="Missing API key: set environment variable 'GEMINI_API_KEY'"):
            create_llm_provider(ProviderSettings())

    @patch.dict(os.environ, {"MY_KEY": "k"})
    @patch("eletters.llm.gemini.genai")
    def test_settings_bridged(self, mock_genai):
        settings = ProviderSettings(api_key_env="MY_KEY", temperature=0.9, max_tokens=1000)
        provider = create_llm_provider(settings)
        assert provider.config.temperature == 0.9
        assert provider.config.max_tokens == 1000
        assert provider.config.api_key == "k"

    def test_provider_label(self):
        assert provider_label("google") == "Gemini"
        assert provider_label("openai") == "OpenAI"
        assert provider_label("other") == "other"


# ---------------------------------------------------------------------------
# Gemini adapter
# ---------------------------------------------------------------------------


class TestGeminiProvider:
    @pytest.mark.asyncio
    @patch("eletters.llm.gemini.genai")
    async def test_generate(self, mock_genai):
        response = MagicMock()
        response.text = '{"id": "x"}'
        response.usage_metadata.prompt_token_count = 11
        response.usage_metadata.candidates_token_count = 22
        mock_genai.GenerativeModel.return_value.generate_content_async = AsyncMock(return_value=response)

        provider = GeminiProvider(LLMConfig(provider="google", model="gemini-test", api_key="k", timeout=9))
        result = await provider.generate("system", "user", max_tokens=100)

        assert result.content == '{"id": "x"}'
        assert result.usage.input_tokens == 11
        assert result.usage.output_tokens == 22
        call = mock_genai.GenerativeModel.return_value.generate_content_async.call_args
        assert "system" in call.args[0] and "user" in call.args[0]
        assert call.kwargs["request_options"] == {"timeout": 9}

    @pytest.mark.asyncio
    @patch("eletters.llm.gemini.genai")
    async def test_api_error_wrapped(self, mock_genai):
        mock_genai.GenerativeModel.return_value.generate_content_async = AsyncMock(
            side_effect=google_exceptions.ResourceExhausted("quota")
        )
        provider = GeminiProvider(LLMConfig(provider="google", model="gemini-test", api_key="k"))
        with pytest.raises(LLMError) as exc_info:
            await provider.generate("s", "u")
        assert exc_info.value.provider == "gemini"
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    @patch("eletters.llm.gemini.genai")
    async def test_empty_text(self, mock_genai):
        response = MagicMock()
        response.text = ""
        mock_genai.GenerativeModel.return_value.generate_content_async = AsyncMock(return_value=response)
        provider = GeminiProvider(LLMConfig(provider="google", model="gemini-test", api_key="k"))
        with pytest.raises(ValueError, match="No text content"):
            await provider.generate("s", "u")


# ---------------------------------------------------------------------------
# OpenAI adapter
# ---------------------------------------------------------------------------


def _openai_response(content="hello"):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.usage.prompt_tokens = 5
    response.usage.completion_tokens = 7
    response.model = "gpt-test"
    return response


class TestOpenAIProvider:
    @pytest.mark.asyncio
    @patch("eletters.llm.openai_adapter.AsyncOpenAI")
    async def test_generate(self, mock_cls):
        mock_cls.return_value.chat.completions.create = AsyncMock(return_value=_openai_response())
        provider = OpenAIProvider(LLMConfig(provider="openai", model="gpt-test", api_key="k"))

        result = await provider.generate("sys", "usr", max_tokens=50)

        assert result.content == "hello"
        assert result.usage.output_tokens == 7
        kwargs = mock_cls.return_value.chat.completions.create.call_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
        assert kwargs["max_tokens"] == 50

    @pytest.mark.asyncio
    @patch("eletters.llm.openai_adapter.AsyncOpenAI")
    async def test_timeout_wrapped_as_retryable(self, mock_cls):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        mock_cls.return_value.chat.completions.create = AsyncMock(
            side_effect=openai.APITimeoutError(request=request)
        )
        provider = OpenAIProvider(LLMConfig(provider="openai", model="gpt-test", api_key="k"))
        with pytest.raises(LLMError) as exc_info:
            await provider.generate("s", "u")
        assert exc_info.value.retryable is True
        assert "openai generate failed" in str(exc_info.value)

    @pytest.mark.asyncio
    @patch("eletters.llm.openai_adapter.AsyncOpenAI")
    async def test_no_choices(self, mock_cls):
        response = _openai_response()
        response.choices = []
        mock_cls.return_value.chat.completions.create = AsyncMock(return_value=response)
        provider = OpenAIProvider(LLMConfig(provider="openai", model="gpt-test", api_key="k"))
        with pytest.raises(ValueError, match="No choices"):
            await provider.generate("s", "u")
