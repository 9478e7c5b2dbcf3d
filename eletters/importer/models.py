"""Wire models for the questionnaire import endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ImportRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str
    mime_type: str = "application/octet-stream"
    data: str


class ImportResponse(BaseModel):
    """Outcome of an import. ``draft_json`` is absent when nothing was parsed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    draft_json: dict[str, Any] | None = None
    notes: list[str] = Field(default_factory=list)
    warning: str | None = None
    error: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ParsedQuestion(BaseModel):
    """A question recognised in converted questionnaire text."""

    text: str
    kind: str = "text_input"
    options: list[str] = Field(default_factory=list)


class ParsedQuestionnaire(BaseModel):
    title: str | None = None
    intro: str | None = None
    questions: list[ParsedQuestion] = Field(default_factory=list)
    skipped: int = 0
