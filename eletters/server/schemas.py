"""Request and response bodies for the HTTP service."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from eletters.drafter.models import DraftSource


class DraftRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt: str = ""
    current_draft_json: Any = None


class DraftResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    draft_json: dict[str, Any]
    source: DraftSource
    warning: str | None = None


class ErrorResponse(BaseModel):
    error: str
