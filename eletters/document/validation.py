"""Structural checks for letter payloads and letter invariants."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from eletters.document.ids import IdGenerator, RandomIds, letter_id, screen_id
from eletters.document.models import (
    Element,
    ElementStyle,
    ElementType,
    Letter,
    Screen,
    ScreenMode,
    ScreenStyle,
)

logger = logging.getLogger(__name__)

NO_TITLE = "No title"
DEFAULT_DONE_LABEL = "Done"

_ALLOWED_TYPES = {t.value for t in ElementType}


class LetterValidationError(ValueError):
    """A value claiming to be a Letter failed the structural check."""


class ValidationResult(BaseModel):
    """Outcome of checking a letter's structural invariants."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.valid = False


def is_letter_payload(value: Any) -> bool:
    """Minimal shape check: string ``id``, string ``title``, list ``screens``."""
    if not isinstance(value, dict):
        return False
    return (
        isinstance(value.get("id"), str)
        and isinstance(value.get("title"), str)
        and isinstance(value.get("screens"), list)
    )


def parse_letter(value: Any) -> Letter:
    """Strictly parse a letter payload. Raises LetterValidationError."""
    if isinstance(value, Letter):
        return value
    if not is_letter_payload(value):
        raise LetterValidationError("Invalid draft JSON: expected id, title and screens")
    try:
        return Letter.model_validate(value)
    except ValidationError as e:
        raise LetterValidationError(f"Invalid draft JSON: {e}") from e


def base_letter(title: str, ids: IdGenerator) -> Letter:
    """A letter with one empty scrolling screen."""
    return Letter(
        id=letter_id(ids),
        title=title or NO_TITLE,
        language="en",
        screens=[
            Screen(
                id=screen_id(ids),
                order=1,
                mode=ScreenMode.scroll,
                style=ScreenStyle(background="#ffffff", element_spacing=12),
                elements=[],
                nav_done_label=DEFAULT_DONE_LABEL,
            )
        ],
    )


def sanitize_letter(value: Any, ids: IdGenerator | None = None) -> Letter:
    """Leniently coerce an untrusted payload (e.g. AI output) into a Letter.

    Unknown element types are dropped, missing ids generated, and missing
    orders default to list position. Never raises.
    """
    ids = ids or RandomIds()
    fallback = base_letter(NO_TITLE, ids)
    if not isinstance(value, dict):
        return fallback

    raw_screens = value.get("screens") if isinstance(value.get("screens"), list) else []
    screens: list[Screen] = []
    for idx, raw in enumerate(raw_screens):
        screens.append(_sanitize_screen(raw if isinstance(raw, dict) else {}, idx, ids))
    screens.sort(key=lambda s: s.order)

    title = value.get("title") if isinstance(value.get("title"), str) else fallback.title
    return Letter(
        id=value["id"] if isinstance(value.get("id"), str) else fallback.id,
        title=title or NO_TITLE,
        language=value["language"] if isinstance(value.get("language"), str) else "en",
        description=value["description"] if isinstance(value.get("description"), str) else None,
        screens=screens or fallback.screens,
    )


def _sanitize_screen(raw: dict, idx: int, ids: IdGenerator) -> Screen:
    raw_elements = raw.get("elements") if isinstance(raw.get("elements"), list) else []
    elements = [el for el in (_sanitize_element(r, ids) for r in raw_elements) if el is not None]

    order = raw.get("order")
    if not isinstance(order, (int, float)) or isinstance(order, bool):
        order = idx + 1

    def _label(key: str) -> str | None:
        return raw[key] if isinstance(raw.get(key), str) else None

    return Screen(
        id=raw["id"] if isinstance(raw.get("id"), str) else screen_id(ids),
        order=int(order),
        mode=ScreenMode.single_screen if raw.get("mode") == "single-screen" else ScreenMode.scroll,
        elements=elements,
        style=_lenient(ScreenStyle, raw.get("style")),
        title=_label("title"),
        nav_next_label=_label("navNextLabel"),
        nav_back_label=_label("navBackLabel"),
        nav_done_label=_label("navDoneLabel") or DEFAULT_DONE_LABEL,
        nav_close_label=_label("navCloseLabel"),
    )


def _sanitize_element(raw: Any, ids: IdGenerator) -> Element | None:
    if not isinstance(raw, dict):
        return None
    el_type = raw.get("type")
    if not isinstance(el_type, str) or el_type not in _ALLOWED_TYPES:
        logger.debug("dropping element with unsupported type %r", el_type)
        return None
    return Element(
        id=raw["id"] if isinstance(raw.get("id"), str) else ids.new_id(),
        type=ElementType(el_type),
        content=raw["content"] if isinstance(raw.get("content"), str) else None,
        props=raw["props"] if isinstance(raw.get("props"), dict) else None,
        style=_lenient(ElementStyle, raw.get("style")),
        parent_id=raw["parentId"] if isinstance(raw.get("parentId"), str) else None,
    )


def _lenient(model: type[BaseModel], raw: Any):
    if not isinstance(raw, dict):
        return None
    try:
        return model.model_validate(raw)
    except ValidationError:
        logger.debug("dropping invalid %s: %r", model.__name__, raw)
        return None


def validate_structure(letter: Letter) -> ValidationResult:
    """Check ordering, id uniqueness, and that parent links form a forest."""
    result = ValidationResult()

    if not letter.screens:
        result.warnings.append("Letter has no screens")

    for order, n in Counter(s.order for s in letter.screens).items():
        if n > 1:
            result.add_error(f"Screen order {order} is used by {n} screens")

    screen_of: dict[str, str] = {}
    parent_of: dict[str, str | None] = {}
    for screen in letter.screens:
        for el in screen.elements:
            if el.id in parent_of:
                result.add_error(f"Duplicate element id: {el.id}")
            screen_of[el.id] = screen.id
            parent_of[el.id] = el.parent_id

    for el_id, parent in parent_of.items():
        if parent is None:
            continue
        if parent not in parent_of:
            result.add_error(f"Element {el_id} references unknown parent {parent}")
        elif screen_of[parent] != screen_of[el_id]:
            result.warnings.append(f"Element {el_id} is nested under {parent} on another screen")

    for el_id in parent_of:
        if _in_cycle(el_id, parent_of):
            result.add_error(f"Element {el_id} is part of a parent cycle")

    return result


def _in_cycle(start: str, parent_of: dict[str, str | None]) -> bool:
    """True when following parent links from ``start`` comes back to it."""
    current = parent_of.get(start)
    for _ in range(len(parent_of)):
        if current is None:
            return False
        if current == start:
            return True
        current = parent_of.get(current)
    return False
