"""Document model: letters, screens, elements and their structural rules."""

from eletters.document.clone import clone_element, clone_letter, clone_screen
from eletters.document.ids import IdGenerator, RandomIds, SequentialIds
from eletters.document.models import (
    UNTITLED,
    Element,
    ElementStyle,
    ElementType,
    Letter,
    Screen,
    ScreenMode,
    ScreenStyle,
)
from eletters.document.questions import (
    QUESTION_TYPES,
    count_questions,
    is_question,
    letter_kind,
)
from eletters.document.validation import (
    LetterValidationError,
    ValidationResult,
    base_letter,
    is_letter_payload,
    parse_letter,
    sanitize_letter,
    validate_structure,
)

__all__ = [
    "Element",
    "ElementStyle",
    "ElementType",
    "IdGenerator",
    "Letter",
    "LetterValidationError",
    "QUESTION_TYPES",
    "RandomIds",
    "Screen",
    "ScreenMode",
    "ScreenStyle",
    "SequentialIds",
    "UNTITLED",
    "ValidationResult",
    "base_letter",
    "clone_element",
    "clone_letter",
    "clone_screen",
    "count_questions",
    "is_letter_payload",
    "is_question",
    "letter_kind",
    "parse_letter",
    "sanitize_letter",
    "validate_structure",
]
