"""Letter translation: offline demo dictionary and LLM-backed engine."""

from eletters.translation.dictionary import (
    LANGUAGE_LABELS,
    TRANSLATION_LANGUAGES,
    check_language,
    translate_text,
)
from eletters.translation.translator import (
    TRANSLATION_MODES,
    TranslationError,
    TranslationResult,
    collect_strings,
    translate_letter,
    translate_letter_llm,
    translate_letter_with_engine,
)

__all__ = [
    "LANGUAGE_LABELS",
    "TRANSLATION_LANGUAGES",
    "TRANSLATION_MODES",
    "TranslationError",
    "TranslationResult",
    "check_language",
    "collect_strings",
    "translate_letter",
    "translate_letter_llm",
    "translate_letter_with_engine",
    "translate_text",
]
