"""Letter kind and delivery metrics for stored drafts."""

from __future__ import annotations

import math
from collections.abc import Iterable

from pydantic import BaseModel

from eletters.document.questions import LetterKind, letter_kind
from eletters.storage.models import EletterDraft, EletterStatus


class DraftMetrics(BaseModel):
    sent: int = 0
    opened: int = 0
    started: int = 0
    completed: int = 0
    running: int = 0
    open_rate: int = 0
    start_rate: int = 0
    completion_rate: int = 0


def draft_kind(draft: EletterDraft) -> LetterKind:
    return letter_kind(draft.letter)


def _rate(part: int, sent: int) -> int:
    # half-up rounding of a percentage
    return math.floor(part * 100 / sent + 0.5) if sent > 0 else 0


def _with_rates(sent: int, opened: int, started: int, completed: int, running: int) -> DraftMetrics:
    return DraftMetrics(
        sent=sent,
        opened=opened,
        started=started,
        completed=completed,
        running=running,
        open_rate=_rate(opened, sent),
        start_rate=_rate(started, sent),
        completion_rate=_rate(completed, sent),
    )


def draft_metrics(draft: EletterDraft) -> DraftMetrics:
    stats = draft.metrics
    return _with_rates(
        stats.sent_count if stats else 0,
        stats.opened_count if stats else 0,
        stats.started_count if stats else 0,
        stats.completed_count if stats else 0,
        1 if draft.status == EletterStatus.running else 0,
    )


def aggregate_metrics(drafts: Iterable[EletterDraft]) -> DraftMetrics:
    sent = opened = started = completed = running = 0
    for draft in drafts:
        if draft.metrics:
            sent += draft.metrics.sent_count
            opened += draft.metrics.opened_count
            started += draft.metrics.started_count
            completed += draft.metrics.completed_count
        if draft.status == EletterStatus.running:
            running += 1
    return _with_rates(sent, opened, started, completed, running)
