"""Abstract LLM interface for letter drafting."""

from __future__ import annotations

from abc import ABC, abstractmethod

from eletters.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic interface for one-shot JSON generation.

    A draft is a single Letter JSON object, so adapters only need the
    non-streaming call.
    """

    name: str = "llm"

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """Generate a complete response (one-shot)."""
        ...
