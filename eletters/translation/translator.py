"""Letter translation with the demo dictionary or an LLM provider."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Literal

from pydantic import BaseModel

from eletters.document.models import Element, ElementType, Letter, Screen
from eletters.drafter.remote import extract_json_candidate
from eletters.llm.base import LLMProvider
from eletters.translation.dictionary import (
    LANGUAGE_LABELS,
    check_language,
    source_language,
    translate_text,
)

logger = logging.getLogger(__name__)

TranslationEngine = Literal["demo", "llm"]
TranslationMode = Literal["auto", "demo", "llm"]
TRANSLATION_MODES = ("auto", "demo", "llm")

TRANSLATABLE_TYPES = frozenset({
    ElementType.header,
    ElementType.subheader,
    ElementType.paragraph,
    ElementType.button,
    ElementType.single_choice,
    ElementType.multiple_choice,
    ElementType.input,
    ElementType.file,
    ElementType.date,
    ElementType.date_input,
    ElementType.rating,
    ElementType.ranking,
})
TRANSLATABLE_PROPS = ("placeholder", "minLabel", "maxLabel", "label", "alt")

LLM_SYSTEM_PROMPT = "\n".join([
    "You translate UI strings of an interactive letter.",
    'Return ONLY valid JSON of the form {"translations": [...]} (no markdown).',
    "Keep the order and the number of strings.",
])

Translate = Callable[[str], str]


class TranslationError(Exception):
    """Raised when a translation engine cannot produce a result."""


class TranslationResult(BaseModel):
    letter: Letter
    engine: TranslationEngine


# ---------------------------------------------------------------------------
# Walking a letter
# ---------------------------------------------------------------------------


def _translate_props(props: dict[str, Any], translate: Translate) -> dict[str, Any]:
    out = dict(props)
    options = out.get("options")
    if isinstance(options, list):
        translated = []
        for opt in options:
            if isinstance(opt, str):
                translated.append(translate(opt))
            elif isinstance(opt, dict) and isinstance(opt.get("label"), str):
                translated.append({**opt, "label": translate(opt["label"])})
            else:
                translated.append(opt)
        out["options"] = translated
    for key in TRANSLATABLE_PROPS:
        if isinstance(out.get(key), str):
            out[key] = translate(out[key])
    return out


def _translate_element(element: Element, translate: Translate) -> Element:
    update: dict[str, Any] = {}
    if element.content is not None and element.type in TRANSLATABLE_TYPES:
        update["content"] = translate(element.content)
    if element.props:
        update["props"] = _translate_props(element.props, translate)
    return element.model_copy(deep=True, update=update)


def _nav_label(current: str | None, default: str, use_default: bool, translate: Translate) -> str | None:
    if current:
        return translate(current)
    if use_default:
        return translate(default)
    return current


def _translate_screen(screen: Screen, index: int, count: int, translate: Translate) -> Screen:
    # letters with several screens get navigation labels filled in
    several = count > 1
    last = index == count - 1
    return screen.model_copy(
        deep=True,
        update={
            "title": translate(screen.title) if screen.title else screen.title,
            "cta_label": translate(screen.cta_label) if screen.cta_label else screen.cta_label,
            "nav_close_label": _nav_label(screen.nav_close_label, "Close", several and index == 0, translate),
            "nav_next_label": _nav_label(screen.nav_next_label, "Next", several and not last, translate),
            "nav_back_label": _nav_label(screen.nav_back_label, "Back", several and index > 0, translate),
            "nav_done_label": _nav_label(screen.nav_done_label, "Done", several and last, translate),
            "elements": [_translate_element(el, translate) for el in screen.elements],
        },
    )


def translate_letter_with(letter: Letter, lang: str, translate: Translate) -> Letter:
    """Apply ``translate`` to every user-facing string of ``letter``.

    Screens come back sorted by order. The input letter is not modified.
    """
    screens = letter.sorted_screens()
    return letter.model_copy(
        deep=True,
        update={
            "language": lang,
            "title": translate(letter.title) if letter.title else letter.title,
            "description": translate(letter.description) if letter.description else letter.description,
            "screens": [
                _translate_screen(screen, i, len(screens), translate)
                for i, screen in enumerate(screens)
            ],
        },
    )


def collect_strings(letter: Letter) -> list[str]:
    """Unique non-blank strings that translating ``letter`` would touch, in walk order."""
    seen: dict[str, None] = {}

    def record(value: str) -> str:
        if value.strip():
            seen.setdefault(value, None)
        return value

    translate_letter_with(letter, letter.language or "en", record)
    return list(seen)


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------


def translate_letter(letter: Letter, lang: str) -> Letter:
    """Offline translation of ``letter`` into ``lang`` with the demo dictionary."""
    check_language(lang)
    return translate_letter_with(letter, lang, lambda text: translate_text(text, lang))


async def translate_strings_llm(
    provider: LLMProvider, texts: list[str], source: str, target: str
) -> list[str]:
    """Translate ``texts`` in one provider call.

    Blank or missing entries in the reply keep the original string.
    Raises TranslationError on a provider failure or a malformed reply.
    """
    payload = json.dumps(
        {
            "sourceLang": LANGUAGE_LABELS.get(source, source),
            "targetLang": LANGUAGE_LABELS.get(target, target),
            "texts": texts,
        },
        ensure_ascii=False,
    )
    try:
        response = await provider.generate(
            LLM_SYSTEM_PROMPT, payload, max_tokens=provider.config.max_tokens
        )
        data = json.loads(extract_json_candidate(response.content))
    except Exception as e:  # noqa: BLE001 - provider and parse failures read the same
        raise TranslationError(f"{provider.name} translation failed: {e}") from e

    translations = data.get("translations") if isinstance(data, dict) else None
    if not isinstance(translations, list):
        raise TranslationError("Translation response missing translations array.")
    result = []
    for i, text in enumerate(texts):
        value = translations[i] if i < len(translations) else None
        result.append(value if isinstance(value, str) and value.strip() else text)
    return result


async def translate_letter_llm(letter: Letter, lang: str, provider: LLMProvider) -> Letter:
    """Translate ``letter`` into ``lang`` through ``provider``."""
    check_language(lang)
    source = source_language(letter.language)
    if source == lang:
        return letter.model_copy(deep=True, update={"language": lang})
    # includes the default nav labels of multi-screen letters
    strings = collect_strings(letter)
    if not strings:
        return letter.model_copy(deep=True, update={"language": lang})
    translations = await translate_strings_llm(provider, strings, source, lang)
    mapping = dict(zip(strings, translations))
    return translate_letter_with(letter, lang, lambda text: mapping.get(text, text))


async def translate_letter_with_engine(
    letter: Letter,
    lang: str,
    mode: TranslationMode = "auto",
    provider: LLMProvider | None = None,
) -> TranslationResult:
    """Translate with the engine ``mode`` names.

    ``llm`` needs a provider and propagates its failures. ``auto`` tries the
    provider when there is one and falls back to the demo dictionary.
    """
    check_language(lang)
    if mode not in TRANSLATION_MODES:
        raise ValueError(f"Unknown translation mode '{mode}'. Use one of: {', '.join(TRANSLATION_MODES)}")
    if mode == "demo":
        return TranslationResult(letter=translate_letter(letter, lang), engine="demo")
    if mode == "llm":
        if provider is None:
            raise TranslationError("No LLM provider configured for translation.")
        return TranslationResult(letter=await translate_letter_llm(letter, lang, provider), engine="llm")

    if provider is not None:
        try:
            return TranslationResult(letter=await translate_letter_llm(letter, lang, provider), engine="llm")
        except TranslationError as e:
            logger.warning("falling back to demo translation: %s", e)
    return TranslationResult(letter=translate_letter(letter, lang), engine="demo")
