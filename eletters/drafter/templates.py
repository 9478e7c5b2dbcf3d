"""Canned letters produced by heuristic generation."""

from __future__ import annotations

import re

from eletters.document.ids import IdGenerator, letter_id, screen_id
from eletters.document.models import (
    Element,
    ElementStyle,
    ElementType,
    Letter,
    Screen,
    ScreenMode,
    ScreenStyle,
)

NO_TITLE = "No title"
TITLE_MAX_CHARS = 42
DEFAULT_SUBJECT = "your product"

_QUOTED = (re.compile(r'"([^"]{2,80})"'), re.compile(r"'([^']{2,80})'"))
_SENTENCE_END = re.compile(r"[.!?\n]")


def _header(ids: IdGenerator, text: str) -> Element:
    return Element(
        id=ids.new_id(),
        type=ElementType.header,
        content=text,
        style=ElementStyle(font_size=26, align="left"),
    )


def _button(ids: IdGenerator, label: str) -> Element:
    return Element(
        id=ids.new_id(),
        type=ElementType.button,
        content=label,
        style=ElementStyle(width=260, height=56, align="center"),
    )


def _options(*labels: str) -> list[dict[str, str]]:
    return [{"label": label} for label in labels]


def _letter(ids: IdGenerator, title: str, elements: list[Element], done_label: str | None) -> Letter:
    return Letter(
        id=letter_id(ids),
        title=title,
        language="en",
        screens=[
            Screen(
                id=screen_id(ids),
                order=1,
                mode=ScreenMode.scroll,
                style=ScreenStyle(background="#ffffff", element_spacing=12),
                nav_done_label=done_label,
                elements=elements,
            )
        ],
    )


def employee_pulse(ids: IdGenerator) -> Letter:
    """Employee Pulse Survey: five questions and a Submit button."""
    title = "Employee Pulse Survey"
    elements = [
        _header(ids, title),
        Element(
            id=ids.new_id(),
            type=ElementType.rating,
            content="How satisfied are you with your work overall?",
            props={
                "max": 5,
                "showPrompt": True,
                "scaleType": "stars",
                "required": True,
                "minLabel": "Low",
                "maxLabel": "High",
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.single_choice,
            content="How would you describe your current workload?",
            props={
                "options": _options("Too low", "About right", "Slightly high", "Too high"),
                "optionFormat": "text",
                "showPrompt": True,
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.multiple_choice,
            content="Which areas would most improve your experience?",
            props={
                "options": _options(
                    "Communication & transparency",
                    "Work-life balance",
                    "Tools & processes",
                    "Career growth",
                    "Recognition & feedback",
                ),
                "optionFormat": "text",
                "showPrompt": True,
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.ranking,
            content="Rank what matters most to you (top = most important)",
            props={
                "options": _options(
                    "Flexible working hours",
                    "Compensation & benefits",
                    "Manager support",
                    "Learning opportunities",
                    "Team culture",
                ),
                "optionFormat": "text",
                "showPrompt": True,
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.input,
            content="What is one thing we should improve next?",
            props={"maxLength": 240, "showPrompt": True},
        ),
        _button(ids, "Submit"),
    ]
    return _letter(ids, title, elements, "Done")


def customer_feedback(ids: IdGenerator, subject: str = DEFAULT_SUBJECT) -> Letter:
    """Customer Feedback Survey about ``subject``."""
    elements = [
        _header(ids, "Customer Feedback"),
        Element(
            id=ids.new_id(),
            type=ElementType.rating,
            content=f"Overall, how satisfied were you with {subject}?",
            props={
                "max": 5,
                "showPrompt": True,
                "scaleType": "stars",
                "required": True,
                "minLabel": "Low",
                "maxLabel": "High",
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.single_choice,
            content="How would you describe the quality?",
            props={
                "options": _options("Excellent", "Good", "Okay", "Not good"),
                "optionFormat": "text",
                "showPrompt": True,
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.multiple_choice,
            content="What did you like? (Select all that apply)",
            props={
                "options": _options(
                    "Taste / flavor",
                    "Packaging",
                    "Value for money",
                    "Delivery / availability",
                    "Brand experience",
                ),
                "optionFormat": "text",
                "showPrompt": True,
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.rating,
            content="How likely are you to recommend it to a friend?",
            props={
                "max": 10,
                "showPrompt": True,
                "scaleType": "numbers",
                "minLabel": "Not likely",
                "maxLabel": "Very likely",
            },
        ),
        Element(
            id=ids.new_id(),
            type=ElementType.input,
            content="Any additional comments?",
            props={"maxLength": 240, "showPrompt": True},
        ),
        _button(ids, "Continue"),
    ]
    return _letter(ids, "Customer Feedback Survey", elements, "Done")


def generic_document(ids: IdGenerator, title: str) -> Letter:
    """Header, empty image, Continue button. No done label."""
    elements = [
        _header(ids, title),
        Element(
            id=ids.new_id(),
            type=ElementType.image,
            content="",
            style=ElementStyle(height=240),
        ),
        _button(ids, "Continue"),
    ]
    return _letter(ids, title, elements, None)


def title_from_prompt(prompt: str) -> str:
    """First sentence of the prompt, capped at 42 characters."""
    cleaned = " ".join(prompt.split())
    if not cleaned:
        return NO_TITLE
    first = _SENTENCE_END.split(cleaned, maxsplit=1)[0].strip()
    return first[:TITLE_MAX_CHARS] or NO_TITLE


def quoted_subject(prompt: str) -> str | None:
    """First double-quoted, else single-quoted, substring of 2 to 80 chars."""
    for pattern in _QUOTED:
        match = pattern.search(prompt)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None
