"""Document conversion subsystem: wraps MarkItDown for questionnaire import."""

from eletters.converter.converter import (
    DOCUMENT_EXTENSIONS,
    IMAGE_EXTENSIONS,
    SUPPORTED_EXTENSIONS,
    TEXT_EXTENSIONS,
    DocumentConverter,
    extension_for,
)
from eletters.converter.models import ConversionResult

__all__ = [
    "ConversionResult",
    "DOCUMENT_EXTENSIONS",
    "DocumentConverter",
    "IMAGE_EXTENSIONS",
    "SUPPORTED_EXTENSIONS",
    "TEXT_EXTENSIONS",
    "extension_for",
]
