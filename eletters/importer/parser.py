"""Find questions and answer options in converted questionnaire text."""

from __future__ import annotations

import re

from eletters.document.ids import IdGenerator, RandomIds
from eletters.document.models import Element, ElementStyle, ElementType, Letter
from eletters.importer.models import ParsedQuestion, ParsedQuestionnaire
from eletters.storage.models import QuestionBankItem, RatingScale
from eletters.storage.seed import element_from_question, template_base

_HEADING = re.compile(r"^#{1,6}\s+(.+?)\s*#*$")
_NUMBERED = re.compile(r"^(?:q(?:uestion)?\s*)?\d{1,3}\s*[.):]\s+(.+)$", re.IGNORECASE)
_OPTION = re.compile(
    r"^(?:[-*+•◦▪●○]\s+(?:\[[ xX]?\]\s*)?"
    r"|\[[ xX]?\]\s*"
    r"|[☐☑☒□■◯]\s*"
    r"|\(\s?\)\s*"
    r"|\(?[a-hA-H][.)]\s+)"
    r"(.+)$"
)
_EMPHASIS = re.compile(r"(\*\*|__)(.+?)\1")
_SCALE = re.compile(r"(?:\b1\s*(?:-|–|to)\s*(\d{1,2})\b)")

_KIND_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"select all|check all|all that apply"), "multiple_choice"),
    (re.compile(r"\brank"), "ranking"),
    (re.compile(r"\brate\b|\brating\b|scale of|on a scale"), "rating"),
    (re.compile(r"\bdate\b"), "date_input"),
    (re.compile(r"\bupload|\battach"), "file_upload"),
]
_NEEDS_OPTIONS = {"multiple_choice", "ranking"}


def _clean(line: str) -> str:
    return _EMPHASIS.sub(r"\2", line).strip()


def detect_kind(text: str, has_options: bool) -> str:
    """Question type for ``text``, judged by its wording, then by its options."""
    lower = text.lower()
    for pattern, kind in _KIND_RULES:
        if pattern.search(lower):
            if kind in _NEEDS_OPTIONS and not has_options:
                break
            return kind
    return "single_choice" if has_options else "text_input"


def parse_questionnaire(markdown: str) -> ParsedQuestionnaire:
    """Scan markdown line by line.

    Numbered lines and lines ending in ``?`` start a question. Bullet,
    checkbox and lettered lines directly after a question become its
    options. The first heading before any question is the title; the first
    plain line before any question is the intro. Everything else is counted
    as skipped.
    """
    result = ParsedQuestionnaire()
    current: ParsedQuestion | None = None

    for raw in markdown.splitlines():
        line = _clean(raw)
        if not line:
            continue

        heading = _HEADING.match(line)
        if heading:
            text = heading.group(1).strip()
            if text.endswith("?"):
                current = _start(result, text)
            elif result.title is None and not result.questions:
                result.title = text
            else:
                result.skipped += 1
            continue

        option = _OPTION.match(line)
        if option and current is not None:
            current.options.append(option.group(1).strip())
            continue

        numbered = _NUMBERED.match(line)
        if numbered:
            current = _start(result, numbered.group(1).strip())
            continue
        if line.endswith("?"):
            current = _start(result, option.group(1).strip() if option else line)
            continue

        if not result.questions and result.intro is None:
            result.intro = line
        else:
            result.skipped += 1

    for question in result.questions:
        question.kind = detect_kind(question.text, bool(question.options))
    return result


def _start(result: ParsedQuestionnaire, text: str) -> ParsedQuestion:
    question = ParsedQuestion(text=text)
    result.questions.append(question)
    return question


def _bank_item(question: ParsedQuestion, idx: int) -> tuple[QuestionBankItem, bool]:
    """Bank item for ``question`` and whether a trailing ``*`` marked it required."""
    text = question.text
    required = text.endswith("*")
    if required:
        text = text.rstrip("* ").strip()
    scale = None
    if question.kind == "rating":
        match = _SCALE.search(text)
        top = int(match.group(1)) if match else 5
        scale = RatingScale(min=1, max=min(max(top, 2), 10))
    item = QuestionBankItem(
        id=f"import-{idx}",
        type=question.kind,
        text=text,
        options=question.options,
        scale=scale,
    )
    return item, required


def build_letter(
    parsed: ParsedQuestionnaire, fallback_title: str, ids: IdGenerator | None = None
) -> Letter:
    """Header, optional intro, one element per question, then a Submit button."""
    ids = ids or RandomIds()
    title = parsed.title or fallback_title
    elements: list[Element] = [
        Element(
            id=ids.new_id(),
            type=ElementType.header,
            content=title,
            style=ElementStyle(font_size=26, align="left"),
        )
    ]
    if parsed.intro:
        elements.append(
            Element(
                id=ids.new_id(),
                type=ElementType.paragraph,
                content=parsed.intro,
                style=ElementStyle(font_size=16),
            )
        )
    for idx, question in enumerate(parsed.questions, start=1):
        item, required = _bank_item(question, idx)
        elements.append(element_from_question(item, required=required, ids=ids))
    elements.append(
        Element(
            id=ids.new_id(),
            type=ElementType.button,
            content="Submit",
            style=ElementStyle(width=260, height=56, align="center"),
        )
    )
    return template_base(title, elements, ids)
