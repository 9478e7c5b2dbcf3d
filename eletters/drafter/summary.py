"""One-line human summaries of a freshly drafted letter."""

from __future__ import annotations

from collections.abc import Mapping

from eletters.document.models import UNTITLED, Letter
from eletters.document.questions import count_questions
from eletters.drafter.models import DraftSource

DEFAULT_SOURCE_LABELS: dict[str, str] = {
    "remote-primary": "Gemini",
    "remote-secondary": "OpenAI",
    "heuristic": "local logic",
}


def _plural(n: int, noun: str) -> str:
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


def summarize(
    letter: Letter,
    source: DraftSource,
    warning: str | None = None,
    *,
    labels: Mapping[str, str] | None = None,
) -> str:
    labels = {**DEFAULT_SOURCE_LABELS, **(labels or {})}
    title = (letter.title or "").strip() or UNTITLED
    questions = count_questions(letter)
    screens = _plural(len(letter.screens), "screen")
    label = labels.get(source, source)

    if questions == 0:
        detail = f'Draft ready: "{title}" with {screens} (source: {label}).'
    else:
        detail = (
            f'Draft ready: "{title}" with {_plural(questions, "question")} '
            f"across {screens} (source: {label})."
        )
    warning_text = f" {warning}" if warning else ""
    return f"{detail}{warning_text} Tell me what to adjust."
