"""Pydantic models for stored drafts, templates and the question bank."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from eletters.document.models import Letter


class EletterStatus(str, Enum):
    draft = "Draft"
    sent = "Sent"
    running = "Running"


class DraftStats(BaseModel):
    """Delivery counters recorded for a sent letter."""

    sent_count: int = 0
    opened_count: int = 0
    started_count: int = 0
    completed_count: int = 0
    last_24h_opens: list[int] = Field(default_factory=list)


class EletterDraft(BaseModel):
    id: str
    name: str
    status: EletterStatus = EletterStatus.draft
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None
    published_by: str | None = None
    letter: Letter = Field(alias="json")
    metrics: DraftStats | None = None

    model_config = ConfigDict(populate_by_name=True)


class Template(BaseModel):
    id: str
    name: str
    source: Literal["user", "library"]
    category: str | None = None
    letter: Letter = Field(alias="json")

    model_config = ConfigDict(populate_by_name=True)


# -- question bank ----------------------------------------------------------


QuestionType = Literal[
    "single_choice",
    "multiple_choice",
    "text_input",
    "date_input",
    "file_upload",
    "ranking",
    "rating",
]


class RatingScale(BaseModel):
    min: int = 1
    max: int = 5
    min_label: str | None = None
    max_label: str | None = None


class QuestionBankItem(BaseModel):
    id: str
    type: QuestionType
    text: str
    categories: list[str] = Field(default_factory=list)
    options: list[str] = Field(default_factory=list)
    scale: RatingScale | None = None
    tags: list[str] = Field(default_factory=list)


class TemplateQuestion(BaseModel):
    order: int
    question_id: str
    required: bool = False


class QuestionnaireTemplate(BaseModel):
    id: str
    name: str
    categories: list[str] = Field(default_factory=list)
    audience: str | None = None
    estimated_minutes: int | None = None
    questions: list[TemplateQuestion] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
