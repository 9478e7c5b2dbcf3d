"""Reflow a letter between one-screen and one-question-per-screen layouts."""

from __future__ import annotations

import logging
from typing import Literal

from eletters.document.clone import clone_element, clone_letter, clone_screen_style
from eletters.document.models import Letter, Screen, ScreenMode, ScreenStyle
from eletters.document.questions import is_question

logger = logging.getLogger(__name__)

LayoutMode = Literal["single", "per-question"]
LAYOUT_MODES: tuple[LayoutMode, ...] = ("single", "per-question")

DEFAULT_DONE_LABEL = "Done"


def transform(letter: Letter, mode: LayoutMode, *, questions_only: bool = False) -> Letter:
    """Return a new letter laid out for ``mode``. The input is never mutated.

    ``questions_only`` restricts the per-question flattening to question
    elements (intro text and buttons are dropped), which is what the import
    flow wants. The AI flow keeps every root element.
    """
    if mode == "single":
        return _spread_single_screen(letter)
    if mode == "per-question":
        return _split_per_question(letter, questions_only=questions_only)
    raise ValueError(f"Unknown layout mode: {mode!r}. Supported: {', '.join(LAYOUT_MODES)}")


def _spread_single_screen(letter: Letter) -> Letter:
    result = clone_letter(letter)
    result.screens = [_center(screen) for screen in result.screens]
    return result


def _center(screen: Screen) -> Screen:
    if len(screen.root_elements()) <= 1:
        return screen
    style = screen.style or ScreenStyle()
    if style.justify_content is None:
        style = style.model_copy(update={"justify_content": "center"})
    return screen.model_copy(update={"style": style})


def _is_per_question(screens: list[Screen]) -> bool:
    return all(
        s.mode == ScreenMode.single_screen and len(s.root_elements()) == 1 for s in screens
    )


def _split_per_question(letter: Letter, *, questions_only: bool) -> Letter:
    screens = letter.sorted_screens()
    if not screens:
        return letter

    entries = [
        el
        for screen in screens
        for el in screen.root_elements()
        if not questions_only or is_question(el.type)
    ]
    if len(entries) <= 1:
        return letter
    # already one entry per screen and nothing filtered out
    if _is_per_question(screens) and len(entries) == len(screens):
        return letter

    base = screens[0]
    done_label = base.nav_done_label or DEFAULT_DONE_LABEL
    generated: list[Screen] = []
    for idx, element in enumerate(entries, start=1):
        generated.append(
            Screen(
                id=f"screen-{idx}",
                order=idx,
                mode=ScreenMode.single_screen,
                elements=[clone_element(element)],
                style=clone_screen_style(base.style),
                nav_done_label=done_label if idx == len(entries) else None,
            )
        )
    logger.debug("split %d elements of %s into per-question screens", len(entries), letter.id)

    result = clone_letter(letter)
    result.screens = generated
    return _spread_single_screen(result)


__all__ = ["LAYOUT_MODES", "LayoutMode", "transform"]
