"""Drafter orchestrator: edit rules, then LLMs, then local heuristics."""

from __future__ import annotations

import logging
from typing import Any

from eletters.config.models import ElettersConfig, ProviderSettings
from eletters.document.ids import IdGenerator, RandomIds
from eletters.document.validation import NO_TITLE, base_letter, sanitize_letter
from eletters.drafter.heuristics import apply_service_edit, generate_from_prompt
from eletters.drafter.models import DraftResult, DraftSource, RemoteFailure, RemoteResult
from eletters.drafter.remote import draft_with_llm
from eletters.llm import create_llm_provider, provider_label
from eletters.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class Drafter:
    """Produces a letter for a prompt, preferring the configured LLMs.

    Order:
        edit rule on current draft → primary LLM → secondary LLM → heuristics
    """

    def __init__(
        self,
        primary: LLMProvider | None = None,
        secondary: LLMProvider | None = None,
        ids: IdGenerator | None = None,
        *,
        primary_name: str = "Gemini",
        missing_reasons: dict[str, str] | None = None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.ids = ids or RandomIds()
        self.primary_name = primary.name if primary is not None else primary_name
        self._missing = missing_reasons or {}

    @classmethod
    def from_config(cls, config: ElettersConfig, ids: IdGenerator | None = None) -> Drafter:
        """Build providers from config. A provider without an API key is skipped."""
        missing: dict[str, str] = {}
        primary = _try_provider(config.llm.primary, "remote-primary", missing)
        secondary = _try_provider(config.llm.secondary, "remote-secondary", missing)
        name = provider_label(config.llm.primary.provider) if config.llm.primary else "Primary AI"
        return cls(primary, secondary, ids, primary_name=name, missing_reasons=missing)

    async def draft(self, prompt: str, current_json: Any = None) -> DraftResult:
        p = prompt.strip()
        if not p:
            return DraftResult(letter=base_letter(NO_TITLE, self.ids), source="heuristic")

        if current_json:
            current = sanitize_letter(current_json, self.ids)
            edited = apply_service_edit(current, p, ids=self.ids)
            if edited is not None:
                logger.info("applied edit rule to %s", current.id)
                return DraftResult(letter=edited, source="heuristic")

        primary = await self._attempt(self.primary, "remote-primary", p)
        if primary.ok:
            return DraftResult(letter=primary.letter, source="remote-primary")

        secondary = await self._attempt(self.secondary, "remote-secondary", p)
        if secondary.ok:
            return DraftResult(letter=secondary.letter, source="remote-secondary")

        warning = f"{self.primary_name} unavailable: {primary.reason}"
        return DraftResult(
            letter=generate_from_prompt(p, ids=self.ids),
            source="heuristic",
            warning=warning,
        )

    async def _attempt(
        self, provider: LLMProvider | None, source: DraftSource, prompt: str
    ) -> RemoteResult:
        if provider is None:
            return RemoteFailure(reason=self._missing.get(source, "Provider not configured."))
        return await draft_with_llm(provider, prompt, source, self.ids)


def _try_provider(
    settings: ProviderSettings | None, source: str, missing: dict[str, str]
) -> LLMProvider | None:
    if settings is None:
        return None
    try:
        return create_llm_provider(settings)
    except ValueError as e:
        logger.info("%s provider unavailable: %s", source, e)
        missing[source] = str(e)
        return None
