"""Questionnaire import: uploaded file → markdown → questions → draft letter."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from collections import Counter

from eletters.config.models import ImporterConfig
from eletters.converter import SUPPORTED_EXTENSIONS, DocumentConverter, extension_for
from eletters.document.ids import IdGenerator, RandomIds
from eletters.importer.models import ImportResponse
from eletters.importer.parser import build_letter, parse_questionnaire
from eletters.layout.transformer import transform

logger = logging.getLogger(__name__)

DEFAULT_DRAFT_NAME = "Imported questionnaire"

_DATA_URL_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)
_EXTENSION = re.compile(r"\.[^/.]+$")

_KIND_LABELS = {
    "single_choice": "single choice",
    "multiple_choice": "multiple choice",
    "text_input": "text",
    "date_input": "date",
    "file_upload": "file upload",
    "ranking": "ranking",
    "rating": "rating",
}


def draft_name_for(file_name: str) -> str:
    """Base name of the upload without its extension."""
    return _EXTENSION.sub("", file_name).strip() or DEFAULT_DRAFT_NAME


def _accepted_label() -> str:
    return ", ".join(ext.lstrip(".").upper() for ext in SUPPORTED_EXTENSIONS)


class ImportService:
    """Turns an uploaded questionnaire into draft JSON."""

    def __init__(
        self,
        config: ImporterConfig | None = None,
        converter: DocumentConverter | None = None,
        ids: IdGenerator | None = None,
    ) -> None:
        self.config = config or ImporterConfig()
        self.converter = converter or DocumentConverter()
        self.ids = ids or RandomIds()

    def import_payload(self, file_name: str, mime_type: str | None, data_b64: str) -> ImportResponse:
        try:
            content = base64.b64decode(_DATA_URL_PREFIX.sub("", data_b64.strip()), validate=True)
        except (binascii.Error, ValueError):
            return ImportResponse(error="Invalid file data: expected base64")
        return self.import_bytes(file_name, mime_type, content)

    def import_bytes(self, file_name: str, mime_type: str | None, content: bytes) -> ImportResponse:
        if not content:
            return ImportResponse(error="The uploaded file is empty")

        limit = self.config.max_file_size_mb
        if len(content) > limit * 1024 * 1024:
            return ImportResponse(error=f"File too large (max {limit} MB)")

        ext = extension_for(file_name, mime_type)
        if ext is None:
            return ImportResponse(error=f"Unsupported file type. Use {_accepted_label()}.")

        converted = self.converter.convert_bytes(content, f"{draft_name_for(file_name)}{ext}")
        if converted is None or not converted.markdown.strip():
            logger.info("could not read %s", file_name)
            return ImportResponse(
                warning="Could not read the document. You can continue with a blank draft.",
            )

        parsed = parse_questionnaire(converted.markdown)
        notes: list[str] = []
        if parsed.skipped:
            notes.append(f"Skipped {parsed.skipped} line(s) that did not look like questions.")
        if not parsed.questions:
            return ImportResponse(
                notes=notes,
                warning="No questions detected. You can continue with a blank draft.",
            )

        counts = Counter(q.kind for q in parsed.questions)
        breakdown = ", ".join(f"{n} {_KIND_LABELS.get(kind, kind)}" for kind, n in counts.items())
        notes.insert(0, f"Detected {len(parsed.questions)} question(s): {breakdown}.")
        if parsed.title:
            notes.append(f'Title taken from heading "{parsed.title}".')

        letter = build_letter(parsed, draft_name_for(file_name), self.ids)
        if self.config.layout == "per-question":
            letter = transform(letter, "per-question", questions_only=True)
            notes.append("Split into one question per screen.")

        logger.info("imported %s: %d questions", file_name, len(parsed.questions))
        return ImportResponse(draft_json=letter.to_json(), notes=notes)
