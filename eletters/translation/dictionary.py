"""Supported languages and the offline demo dictionary."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

PRIMARY_LANGUAGES = ("en", "de", "it", "fr")
ADDITIONAL_LANGUAGES = ("es", "pt", "nl", "pl", "sv", "da", "no", "fi")
TRANSLATION_LANGUAGES = PRIMARY_LANGUAGES + ADDITIONAL_LANGUAGES

LANGUAGE_LABELS: dict[str, str] = {
    "en": "English",
    "de": "Deutsch",
    "it": "Italiano",
    "fr": "Francais",
    "es": "Spanish",
    "pt": "Portuguese",
    "nl": "Dutch",
    "pl": "Polish",
    "sv": "Swedish",
    "da": "Danish",
    "no": "Norwegian",
    "fi": "Finnish",
}

_TOKEN = re.compile(r"\b[\w']+\b")


class PhraseBook(BaseModel):
    """Demo dictionary for one language."""

    phrases: dict[str, str] = Field(default_factory=dict)
    words: dict[str, str] = Field(default_factory=dict)


def check_language(lang: str) -> str:
    """Return ``lang`` if supported, else raise ValueError."""
    if lang not in TRANSLATION_LANGUAGES:
        raise ValueError(
            f"Unsupported language '{lang}'. Use one of: {', '.join(TRANSLATION_LANGUAGES)}"
        )
    return lang


def source_language(language: str | None) -> str:
    """Language a letter is written in, English when unset or unknown."""
    lang = language or "en"
    return lang if lang in TRANSLATION_LANGUAGES else "en"


@lru_cache(maxsize=1)
def _load_books(data_dir: Path = DATA_DIR) -> dict[str, PhraseBook]:
    raw = yaml.safe_load((data_dir / "translations.yaml").read_text(encoding="utf-8")) or {}
    phrases = raw.get("phrases") or {}
    words = raw.get("words") or {}
    return {
        lang: PhraseBook(phrases=phrases.get(lang) or {}, words=words.get(lang) or {})
        for lang in set(phrases) | set(words)
    }


def phrase_book(lang: str) -> PhraseBook:
    """Demo dictionary for ``lang``. Empty for languages without one."""
    return _load_books().get(lang) or PhraseBook()


def _apply_case(source: str, mapped: str) -> str:
    if source.upper() == source:
        return mapped.upper()
    if source[0].isupper():
        return mapped[:1].upper() + mapped[1:]
    return mapped


def translate_text(text: str, lang: str) -> str:
    """Translate ``text`` with the demo dictionary.

    A whole-phrase match wins. Otherwise known words are replaced one by
    one, keeping the capitalisation of the original word. Text with no
    known phrase or word comes back unchanged.
    """
    if lang == "en":
        return text
    trimmed = text.strip()
    if not trimmed:
        return text
    book = phrase_book(lang)
    exact = book.phrases.get(trimmed)
    if exact:
        return exact

    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        mapped = book.words.get(token.lower())
        return _apply_case(token, mapped) if mapped else token

    return _TOKEN.sub(replace, text)
