"""Structural copies of document models.

Each function rebuilds its model field by field so the result shares no
mutable state (props, styles, element lists) with the source.
"""

from __future__ import annotations

import copy

from eletters.document.ids import IdGenerator, letter_id, screen_id
from eletters.document.models import Element, ElementStyle, Letter, Screen, ScreenStyle


def clone_element_style(style: ElementStyle | None) -> ElementStyle | None:
    if style is None:
        return None
    return style.model_copy(deep=True)


def clone_screen_style(style: ScreenStyle | None) -> ScreenStyle | None:
    if style is None:
        return None
    return style.model_copy(deep=True)


def clone_element(element: Element, *, new_id: str | None = None) -> Element:
    return Element(
        id=new_id or element.id,
        type=element.type,
        content=element.content,
        props=copy.deepcopy(element.props) if element.props is not None else None,
        style=clone_element_style(element.style),
        parent_id=element.parent_id,
    )


def clone_screen(screen: Screen) -> Screen:
    return Screen(
        id=screen.id,
        order=screen.order,
        mode=screen.mode,
        elements=[clone_element(el) for el in screen.elements],
        style=clone_screen_style(screen.style),
        title=screen.title,
        cta_label=screen.cta_label,
        nav_next_label=screen.nav_next_label,
        nav_back_label=screen.nav_back_label,
        nav_done_label=screen.nav_done_label,
        nav_close_label=screen.nav_close_label,
    )


def clone_letter(letter: Letter) -> Letter:
    return Letter(
        id=letter.id,
        title=letter.title,
        description=letter.description,
        language=letter.language,
        brand_id=letter.brand_id,
        screens=[clone_screen(s) for s in letter.screens],
    )


def reassign_ids(letter: Letter, ids: IdGenerator) -> Letter:
    """Copy of ``letter`` where the letter, every screen and every element get fresh ids.

    Parent links are rewritten to the new element ids.
    """
    mapping = {el.id: ids.new_id() for screen in letter.screens for el in screen.elements}
    result = clone_letter(letter)
    result.id = letter_id(ids)
    for screen in result.screens:
        screen.id = screen_id(ids)
        for el in screen.elements:
            el.id = mapping[el.id]
            if el.parent_id is not None:
                el.parent_id = mapping.get(el.parent_id, el.parent_id)
    return result
