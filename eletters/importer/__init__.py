"""Questionnaire import: convert uploads and detect their questions."""

from eletters.importer.models import ImportRequest, ImportResponse, ParsedQuestion, ParsedQuestionnaire
from eletters.importer.parser import build_letter, detect_kind, parse_questionnaire
from eletters.importer.service import ImportService, draft_name_for

__all__ = [
    "ImportRequest",
    "ImportResponse",
    "ImportService",
    "ParsedQuestion",
    "ParsedQuestionnaire",
    "build_letter",
    "detect_kind",
    "draft_name_for",
    "parse_questionnaire",
]
