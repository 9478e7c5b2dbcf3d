"""Conversational drafting session: prompt, preview, apply."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field

from eletters.document.ids import IdGenerator, RandomIds
from eletters.document.models import Letter
from eletters.drafter.heuristics import synthesize
from eletters.drafter.models import DraftSource, RemoteSuccess
from eletters.drafter.summary import summarize
from eletters.layout.transformer import LayoutMode, transform

if TYPE_CHECKING:
    from eletters.client.http import RemoteDraftClient

logger = logging.getLogger(__name__)

OFFLINE_WARNING = "Gemini unavailable: AI backend not reachable."
FAILURE_MESSAGE = "Sorry — I could not generate a draft. Please try again."


class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    role: Literal["user", "assistant"]
    text: str


class DraftSession:
    """Holds one in-progress draft and the chat that produced it.

    The remote draft service is tried first; when it is missing or fails,
    the local heuristics draft instead and the reply carries a warning.
    """

    def __init__(
        self,
        client: RemoteDraftClient | None = None,
        *,
        ids: IdGenerator | None = None,
        layout_mode: LayoutMode = "single",
        labels: Mapping[str, str] | None = None,
    ) -> None:
        self.client = client
        self.ids = ids or RandomIds()
        self.layout_mode: LayoutMode = layout_mode
        self.labels = labels
        self.draft: Letter | None = None
        self.messages: list[ChatMessage] = []
        self.last_error: str | None = None

    async def submit(self, prompt: str) -> str | None:
        """Send one instruction. Returns the assistant reply, or None for blank input."""
        text = prompt.strip()
        if not text:
            return None
        had_draft = self.draft is not None
        self.last_error = None
        self.messages.append(ChatMessage(role="user", text=text))

        try:
            letter, source, warning = await self._generate(text)
        except Exception:
            logger.exception("draft generation failed")
            self.last_error = FAILURE_MESSAGE
            self.messages.append(ChatMessage(role="assistant", text=FAILURE_MESSAGE))
            self.draft = None
            return FAILURE_MESSAGE

        self.draft = letter
        reply = summarize(letter, source, warning, labels=self.labels)
        if had_draft:
            reply = f"Updated draft. {reply}"
        self.messages.append(ChatMessage(role="assistant", text=reply))
        return reply

    async def _generate(self, prompt: str) -> tuple[Letter, DraftSource, str | None]:
        if self.client is not None:
            result = await self.client.draft(prompt, self.draft)
            if isinstance(result, RemoteSuccess):
                return result.letter, result.source, result.warning
            logger.info("draft service failed (%s); using local logic", result.reason)
        letter = synthesize(prompt, self.draft, ids=self.ids)
        return letter, "heuristic", OFFLINE_WARNING

    def set_layout(self, mode: LayoutMode) -> None:
        self.layout_mode = mode

    def preview(self) -> Letter | None:
        """The current draft in the selected layout."""
        if self.draft is None:
            return None
        return transform(self.draft, self.layout_mode)

    def apply(self) -> Letter | None:
        """The letter to hand off to the editor (the preview)."""
        return self.preview()
