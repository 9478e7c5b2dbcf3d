"""Pydantic models for draft results and remote call outcomes."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field

from eletters.document.models import Letter

DraftSource = Literal["remote-primary", "remote-secondary", "heuristic"]


class DraftResult(BaseModel):
    """A drafted letter and where it came from."""

    letter: Letter
    source: DraftSource = "heuristic"
    warning: str | None = None


class RemoteSuccess(BaseModel):
    """A remote call that produced a structurally valid letter."""

    ok: Literal[True] = True
    letter: Letter
    source: DraftSource = "heuristic"
    warning: str | None = None
    notes: list[str] = Field(default_factory=list)


class RemoteFailure(BaseModel):
    """A remote call that could not be used. ``reason`` is human readable."""

    ok: Literal[False] = False
    reason: str


RemoteResult = Union[RemoteSuccess, RemoteFailure]
