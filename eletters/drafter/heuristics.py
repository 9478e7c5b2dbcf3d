"""Rule-based drafting used when no AI service is reachable.

Two edit rules are tried against an existing draft (split into one question
per screen, add a free-text question). When neither matches, or there is no
draft, a new letter is generated from keyword heuristics. The draft service
uses a larger rule set, see :func:`apply_service_edit`.
"""

from __future__ import annotations

import logging
import re

from eletters.document.clone import clone_element, clone_letter, clone_screen_style
from eletters.document.ids import IdGenerator, RandomIds, screen_id
from eletters.document.models import (
    Element,
    ElementType,
    Letter,
    Screen,
    ScreenMode,
    ScreenStyle,
)
from eletters.document.questions import is_question
from eletters.drafter.templates import (
    DEFAULT_SUBJECT,
    customer_feedback,
    employee_pulse,
    generic_document,
    quoted_subject,
    title_from_prompt,
)

logger = logging.getLogger(__name__)

_SPLIT_PATTERNS = [
    re.compile(r"\bone\s+question\s+per\s+screen\b"),
    re.compile(r"\bevery\s+question\s+on\s+(?:a|one)\s+separate\s+screen\b"),
    re.compile(r"\beach\s+question\s+on\s+(?:a|one)\s+separate\s+screen\b"),
    re.compile(r"\bseparate\s+screen\s+for\s+each\s+question\b"),
]
_ADD_PATTERNS = [
    re.compile(r"\badd\s+(?:a\s+)?question\b(?:\s+about|\s+for|\s+on)?\s*(.*)$", re.IGNORECASE),
    re.compile(r"\binclude\s+(?:a\s+)?question\b(?:\s+about|\s+for|\s+on)?\s*(.*)$", re.IGNORECASE),
]
_FAVOURITE = re.compile(r"\bfavou?rite\b", re.IGNORECASE)
_TRAILING_PUNCT = re.compile(r"[.?!]$")
_REMOVE_PATTERNS = [
    re.compile(r"\bremove\s+(?:question\s*)?#?(\d+)\b"),
    re.compile(r"\bdelete\s+(?:question\s*)?#?(\d+)\b"),
]
_COUNT = re.compile(r"\b(\d+)\s+questions?\b")
_WANTS_CHOICE = re.compile(r"\b(?:single choice|multiple choice|multi choice|select)\b")
_WANTS_TEXT = re.compile(r"\b(?:text|open|free text)\b")
_MULTIPLE = re.compile(r"\bmultiple\b")
_DEFAULT_OPTIONS = ("Red", "White", "Rosé", "Sparkling")

MAX_REQUESTED_QUESTIONS = 15
MAX_PADDED_QUESTIONS = 6

_EMPLOYEE = re.compile(r"employee|employees|team|pulse|wellbeing|culture|engagement", re.IGNORECASE)
_FEEDBACK = re.compile(
    r"survey|questionnaire|feedback|review|rate|rating|satisfied|satisfaction|recommend"
    r"|nps|customer|client|liked|like it|how did.*feel|how do.*feel|want to know",
    re.IGNORECASE,
)


def _normalize(text: str) -> str:
    return " ".join(text.split())


def synthesize(instruction: str, current: Letter | None = None, *, ids: IdGenerator | None = None) -> Letter:
    """Edit ``current`` when the instruction matches an edit rule, else generate."""
    ids = ids or RandomIds()
    if current is not None:
        edited = apply_edit(current, instruction, ids=ids)
        if edited is not None:
            return edited
    return generate_from_prompt(instruction, ids=ids)


def apply_edit(current: Letter, instruction: str, *, ids: IdGenerator | None = None) -> Letter | None:
    """Apply the first matching edit rule. ``None`` means no rule applied."""
    ids = ids or RandomIds()
    text = _normalize(instruction)
    if not text:
        return None
    lower = text.lower()

    if any(p.search(lower) for p in _SPLIT_PATTERNS):
        return _split_questions(current, ids)

    for pattern in _ADD_PATTERNS:
        match = pattern.search(text)
        if match:
            return _add_question(current, match.group(1), ids)
    return None


def apply_service_edit(
    current: Letter, instruction: str, *, ids: IdGenerator | None = None
) -> Letter | None:
    """Edit rules of the draft service, tried in order: split, remove, add, count.

    Richer than :func:`apply_edit`: split screens carry nav labels and any
    trailing non-question content, ``remove question #N`` and ``make it N
    questions`` are understood, and added questions are typed from the wording.
    """
    ids = ids or RandomIds()
    text = _normalize(instruction)
    if not text:
        return None
    lower = text.lower()

    if any(p.search(lower) for p in _SPLIT_PATTERNS):
        return _split_questions(current, ids, carry_trailing=True, nav_labels=True)

    for pattern in _REMOVE_PATTERNS:
        match = pattern.search(lower)
        if match:
            removed = _remove_question(current, int(match.group(1)))
            if removed is not None:
                return removed
            break

    for pattern in _ADD_PATTERNS:
        match = pattern.search(text)
        if match:
            return _add_typed_question(current, match.group(1), lower, ids)

    match = _COUNT.search(lower)
    if match:
        return _pad_questions(current, int(match.group(1)), ids)
    return None


def _intro_elements(first: Screen) -> list[Element]:
    """Non-button elements ahead of the first question on ``first``.

    Empty when the screen has no question or opens with one.
    """
    pos = next((i for i, el in enumerate(first.elements) if is_question(el.type)), -1)
    if pos <= 0:
        return []
    return [el for el in first.elements[:pos] if el.type != ElementType.button]


def _trailing_elements(screens: list[Screen]) -> list[Element]:
    flat = [el for s in screens for el in s.elements]
    last = max((i for i, el in enumerate(flat) if is_question(el.type)), default=-1)
    if last < 0:
        return []
    return [
        el for el in flat[last + 1:] if el.type != ElementType.button and not is_question(el.type)
    ]


def _split_questions(
    current: Letter,
    ids: IdGenerator,
    *,
    carry_trailing: bool = False,
    nav_labels: bool = False,
) -> Letter | None:
    screens = current.sorted_screens()
    if not screens:
        return None
    questions = [el for s in screens for el in s.elements if is_question(el.type)]
    if len(questions) <= 1:
        return None

    first = screens[0]
    intro = _intro_elements(first)
    trailing = _trailing_elements(screens) if carry_trailing else []
    base_style = clone_screen_style(first.style) or ScreenStyle(background="#ffffff", element_spacing=12)

    generated: list[Screen] = []
    last = len(questions)
    for idx, q in enumerate(questions, start=1):
        elements = (intro if idx == 1 else []) + [q] + (trailing if idx == last else [])
        screen = Screen(
            id=screen_id(ids),
            order=idx,
            mode=ScreenMode.single_screen,
            style=base_style.model_copy(deep=True),
            elements=[clone_element(el) for el in elements],
        )
        if nav_labels:
            screen.nav_next_label = "Next" if idx == 1 else None
            screen.nav_back_label = "Back" if idx > 1 else None
            screen.nav_done_label = "Done" if idx == last else None
            screen.nav_close_label = "Close" if idx == 1 else None
        generated.append(screen)

    result = clone_letter(current)
    result.screens = generated
    logger.debug("split %d questions onto separate screens", len(questions))
    return result


def _insert_before_button(letter: Letter, element: Element) -> None:
    target = letter.first_screen()
    if target is None:
        # nothing to insert into
        return
    for idx, el in enumerate(target.elements):
        if el.type == ElementType.button:
            target.elements.insert(idx, element)
            return
    target.elements.append(element)


def _subject(topic: str) -> str:
    return _TRAILING_PUNCT.sub("", topic.strip()).strip() or "your experience"


def _favourite_question(subject: str, ids: IdGenerator) -> Element:
    thing = " ".join(_FAVOURITE.sub("", subject, count=1).split()) or "wine"
    return Element(
        id=ids.new_id(),
        type=ElementType.input,
        content=f"What is your favourite {thing}?",
        props={"required": False, "maxLength": 120, "showPrompt": True},
    )


def _add_question(current: Letter, topic: str, ids: IdGenerator) -> Letter:
    subject = _subject(topic)
    if _FAVOURITE.search(subject):
        question = _favourite_question(subject, ids)
    else:
        question = Element(
            id=ids.new_id(),
            type=ElementType.input,
            content=f"Any feedback about {subject}?",
            props={"required": False, "maxLength": 200, "showPrompt": True},
        )

    result = clone_letter(current)
    _insert_before_button(result, question)
    return result


def _add_typed_question(current: Letter, topic: str, lower: str, ids: IdGenerator) -> Letter:
    subject = _subject(topic)
    wants_choice = _WANTS_CHOICE.search(lower) is not None
    if _WANTS_TEXT.search(lower) or (not wants_choice and _FAVOURITE.search(subject)):
        question = _favourite_question(subject, ids)
    else:
        multi = _MULTIPLE.search(lower) is not None
        question = Element(
            id=ids.new_id(),
            type=ElementType.multiple_choice if multi else ElementType.single_choice,
            content=(
                f"Which {subject} do you prefer? (Select all that apply)"
                if multi
                else f"Which {subject} do you prefer?"
            ),
            props={
                "options": [{"label": label} for label in _DEFAULT_OPTIONS],
                "optionFormat": "text",
                "showPrompt": True,
            },
        )

    result = clone_letter(current)
    _insert_before_button(result, question)
    return result


def _first_screen_questions(letter: Letter) -> list[Element]:
    screen = letter.first_screen()
    if screen is None:
        return []
    return [el for el in screen.elements if is_question(el.type)]


def _remove_question(current: Letter, number: int) -> Letter | None:
    """Drop the ``number``-th (1-based) question of the first screen."""
    questions = _first_screen_questions(current)
    if not 1 <= number <= len(questions):
        return None
    doomed = questions[number - 1].id
    result = clone_letter(current)
    target = result.first_screen()
    target.elements = [el for el in target.elements if el.id != doomed]
    return result


def _pad_questions(current: Letter, wanted: int, ids: IdGenerator) -> Letter | None:
    """Top the first screen up to ``wanted`` questions with comment inputs."""
    desired = max(1, min(MAX_REQUESTED_QUESTIONS, wanted))
    missing = desired - len(_first_screen_questions(current))
    if missing <= 0:
        return None
    result = clone_letter(current)
    for i in range(1, min(MAX_PADDED_QUESTIONS, missing) + 1):
        _insert_before_button(
            result,
            Element(
                id=ids.new_id(),
                type=ElementType.input,
                content=f"Additional comment {i}",
                props={"required": False, "maxLength": 160, "showPrompt": True},
            ),
        )
    return result


def generate_from_prompt(prompt: str, *, ids: IdGenerator | None = None) -> Letter:
    """Build a fresh letter from keywords in the prompt. Never fails."""
    ids = ids or RandomIds()
    text = prompt.strip()
    if _EMPLOYEE.search(text):
        return employee_pulse(ids)
    if _FEEDBACK.search(text):
        return customer_feedback(ids, quoted_subject(text) or DEFAULT_SUBJECT)
    return generic_document(ids, title_from_prompt(text))
