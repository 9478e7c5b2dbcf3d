"""Question classification: which element types count as survey questions."""

from __future__ import annotations

from typing import Literal

from eletters.document.models import Element, ElementType, Letter

LetterKind = Literal["informative", "interactive"]

QUESTION_TYPES: frozenset[ElementType] = frozenset({
    ElementType.single_choice,
    ElementType.multiple_choice,
    ElementType.input,
    ElementType.file,
    ElementType.date,
    ElementType.date_input,
    ElementType.rating,
    ElementType.ranking,
})


def is_question(element_type: ElementType | str) -> bool:
    """True when the type is in the Question Set. Unknown strings are not questions."""
    try:
        return ElementType(element_type) in QUESTION_TYPES
    except ValueError:
        return False


def is_question_element(element: Element) -> bool:
    return is_question(element.type)


def question_elements(letter: Letter) -> list[Element]:
    """All question elements across screens, in screen order."""
    return [el for el in letter.iter_elements() if is_question(el.type)]


def count_questions(letter: Letter) -> int:
    return len(question_elements(letter))


def letter_kind(letter: Letter) -> LetterKind:
    for element in letter.iter_elements():
        if is_question(element.type):
            return "interactive"
    return "informative"
