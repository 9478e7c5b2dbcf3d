"""Drafting: heuristic synthesis, LLM orchestration and chat sessions."""

from eletters.drafter.drafter import Drafter
from eletters.drafter.heuristics import apply_edit, apply_service_edit, generate_from_prompt, synthesize
from eletters.drafter.models import (
    DraftResult,
    DraftSource,
    RemoteFailure,
    RemoteResult,
    RemoteSuccess,
)
from eletters.drafter.session import ChatMessage, DraftSession
from eletters.drafter.summary import DEFAULT_SOURCE_LABELS, summarize

__all__ = [
    "ChatMessage",
    "DEFAULT_SOURCE_LABELS",
    "DraftResult",
    "DraftSession",
    "DraftSource",
    "Drafter",
    "RemoteFailure",
    "RemoteResult",
    "RemoteSuccess",
    "apply_edit",
    "apply_service_edit",
    "generate_from_prompt",
    "summarize",
    "synthesize",
]
