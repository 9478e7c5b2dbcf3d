"""Letter drafting through an LLM provider."""

from __future__ import annotations

import json
import logging
import re

from eletters.document.ids import IdGenerator
from eletters.document.validation import sanitize_letter
from eletters.drafter.models import DraftSource, RemoteFailure, RemoteResult, RemoteSuccess
from eletters.llm.base import LLMProvider

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "\n".join([
    "You generate JSON for an E-Letter Builder.",
    "Return ONLY valid JSON (no markdown).",
    "Use only these element types: header, subheader, paragraph, image, video, button, "
    "single-choice, multiple-choice, input, file, date, date-input, rating, ranking.",
    "Always return a single Letter object with screens[0].elements containing a reasonable draft.",
    "Keep it under 25 elements.",
])

_FENCED = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def extract_json_candidate(text: str) -> str:
    """Pull the JSON object out of a model reply.

    Tries the whole reply, then the first fenced block, then the outermost
    ``{...}`` span. Raises ValueError when none is found.
    """
    trimmed = text.strip()
    if trimmed.startswith("{") and trimmed.endswith("}"):
        return trimmed
    fenced = _FENCED.search(trimmed)
    if fenced and fenced.group(1).strip():
        return fenced.group(1).strip()
    start = trimmed.find("{")
    end = trimmed.rfind("}")
    if start != -1 and end > start:
        return trimmed[start : end + 1]
    raise ValueError("No JSON payload found")


async def draft_with_llm(
    provider: LLMProvider,
    prompt: str,
    source: DraftSource,
    ids: IdGenerator,
) -> RemoteResult:
    """Ask ``provider`` for a letter. Every failure becomes a RemoteFailure."""
    try:
        response = await provider.generate(SYSTEM_PROMPT, prompt, max_tokens=provider.config.max_tokens)
        if not response.content.strip():
            raise ValueError("Empty response")
        payload = json.loads(extract_json_candidate(response.content))
    except Exception as e:  # noqa: BLE001 - any provider failure falls back
        logger.warning("%s draft failed: %s", provider.name, e)
        return RemoteFailure(reason=str(e) or type(e).__name__)
    letter = sanitize_letter(payload, ids)
    logger.info("%s drafted %r (%d screens)", provider.name, letter.title, len(letter.screens))
    return RemoteSuccess(letter=letter, source=source)
