"""Pydantic models for the document conversion subsystem."""

from __future__ import annotations

from pydantic import BaseModel


class ConversionResult(BaseModel):
    """Result of converting an uploaded questionnaire to markdown."""

    source_name: str
    markdown: str
    format: str  # pdf, docx, png, etc.
