"""Questionnaire-to-markdown converter wrapping MarkItDown."""

from __future__ import annotations

import io
import logging
from functools import cached_property
from pathlib import Path
from typing import IO, Any

from eletters.converter.models import ConversionResult

logger = logging.getLogger(__name__)

try:
    from markitdown import MarkItDown
except ImportError:
    MarkItDown = None  # type: ignore[assignment,misc]
    logger.warning("markitdown not installed — document import disabled")


DOCUMENT_EXTENSIONS: dict[str, str] = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
    ".html": "text/html",
}

IMAGE_EXTENSIONS: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}

TEXT_EXTENSIONS: dict[str, str] = {
    ".txt": "text/plain",
    ".md": "text/markdown",
}

SUPPORTED_EXTENSIONS: dict[str, str] = {
    **DOCUMENT_EXTENSIONS,
    **IMAGE_EXTENSIONS,
    **TEXT_EXTENSIONS,
}


def extension_for(filename: str, mime_type: str | None = None) -> str | None:
    """Supported extension for an upload, by file name first, then MIME type."""
    ext = Path(filename).suffix.lower()
    if ext in SUPPORTED_EXTENSIONS:
        return ext
    if mime_type:
        for candidate, mime in SUPPORTED_EXTENSIONS.items():
            if mime == mime_type.lower():
                return candidate
    return None


class DocumentConverter:
    """Wraps MarkItDown with error resilience. Plain text bypasses it."""

    def __init__(self, llm_client: Any = None, llm_model: str | None = None) -> None:
        self._llm_client = llm_client
        self._llm_model = llm_model

    @cached_property
    def _md(self) -> MarkItDown | None:
        if MarkItDown is None:
            return None

        kwargs: dict[str, Any] = {"enable_plugins": False}
        if self._llm_client is not None:
            # image OCR goes through the LLM when one is supplied
            kwargs["llm_client"] = self._llm_client
            kwargs["llm_model"] = self._llm_model
        return MarkItDown(**kwargs)

    def convert_bytes(self, data: bytes, filename: str) -> ConversionResult | None:
        return self.convert_stream(io.BytesIO(data), filename)

    def convert_stream(
        self, stream: IO[bytes], filename: str
    ) -> ConversionResult | None:
        """Convert a binary stream to markdown. Returns None on any error."""
        ext = Path(filename).suffix.lower()
        fmt = ext.lstrip(".")

        if ext in TEXT_EXTENSIONS:
            raw = stream.read()
            return ConversionResult(
                source_name=filename,
                markdown=raw.decode("utf-8", errors="replace"),
                format=fmt,
            )

        if self._md is None:
            logger.warning("markitdown unavailable — skipping stream %s", filename)
            return None

        try:
            result = self._md.convert_stream(stream, file_extension=ext)
            markdown = result.markdown
        except Exception:
            logger.warning("Stream conversion failed for %s", filename, exc_info=True)
            return None

        return ConversionResult(
            source_name=filename,
            markdown=markdown,
            format=fmt,
        )
