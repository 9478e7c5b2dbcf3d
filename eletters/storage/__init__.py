"""Draft/template storage, seed content and delivery metrics."""

from eletters.storage.metrics import DraftMetrics, aggregate_metrics, draft_kind, draft_metrics
from eletters.storage.models import DraftStats, EletterDraft, EletterStatus, Template
from eletters.storage.seed import (
    create_blank_letter,
    element_from_question,
    library_templates,
    question_bank,
    template_base,
)
from eletters.storage.store import DraftNotFoundError, DraftStorage, JsonDraftStore

__all__ = [
    "DraftMetrics",
    "DraftNotFoundError",
    "DraftStats",
    "DraftStorage",
    "EletterDraft",
    "EletterStatus",
    "JsonDraftStore",
    "Template",
    "aggregate_metrics",
    "create_blank_letter",
    "draft_kind",
    "draft_metrics",
    "element_from_question",
    "library_templates",
    "question_bank",
    "template_base",
]
