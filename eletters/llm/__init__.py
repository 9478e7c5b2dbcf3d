"""LLM provider abstraction layer."""

import os

from eletters.config.models import ProviderSettings
from eletters.llm.base import LLMProvider
from eletters.llm.gemini import GeminiProvider
from eletters.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage
from eletters.llm.openai_adapter import OpenAIProvider

_PROVIDER_MAP: dict[str, type[LLMProvider]] = {
    "google": GeminiProvider,
    "openai": OpenAIProvider,
}


def create_llm_provider(config: ProviderSettings) -> LLMProvider:
    """Create an LLM provider from app-level config.

    Resolves the API key from the env var in config.api_key_env, then
    bridges the app-level settings to the provider-level LLMConfig.
    """
    cls = _PROVIDER_MAP.get(config.provider)
    if cls is None:
        raise ValueError(
            f"Unsupported LLM provider: {config.provider!r}. "
            f"Supported: {', '.join(_PROVIDER_MAP)}"
        )
    api_key = os.environ.get(config.api_key_env)
    if not api_key:
        raise ValueError(
            f"Missing API key: set environment variable {config.api_key_env!r}"
        )
    llm_config = LLMConfig(
        provider=config.provider,
        model=config.model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        timeout=config.timeout,
        api_key=api_key,
    )
    return cls(llm_config)


def provider_label(provider: str) -> str:
    """Display name for a configured provider id."""
    cls = _PROVIDER_MAP.get(provider)
    return cls.name if cls is not None else provider


__all__ = [
    "GeminiProvider",
    "LLMConfig",
    "LLMError",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "TokenUsage",
    "create_llm_provider",
    "provider_label",
]
