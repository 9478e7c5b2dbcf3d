"""Abstract preview descriptors for letters.

Renderers (the CLI tree, a web front end) draw from these blocks; nothing
here knows about markup or styling.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

from eletters.document.models import Element, ElementType, Letter, ScreenMode

BlockKind = Literal["heading", "text", "button", "media", "choice", "input", "file", "date", "rating", "ranking", "group"]

MAX_OPTIONS = 5
RATING_GLYPHS = {"stars": "☆", "hearts": "♡"}


class PreviewBlock(BaseModel):
    kind: BlockKind
    element_type: ElementType
    label: str
    options: list[str] = Field(default_factory=list)
    multi: bool = False
    glyphs: list[str] = Field(default_factory=list)
    min_label: str | None = None
    max_label: str | None = None
    placeholder: bool = False


class ScreenPreview(BaseModel):
    order: int
    mode: ScreenMode
    justify: str
    blocks: list[PreviewBlock] = Field(default_factory=list)


def option_labels(props: dict[str, Any], fallback: list[str]) -> tuple[list[str], bool]:
    """Up to five labels from ``{label}`` dicts or plain strings.

    Returns the fallback (and ``True``) when the element has no options.
    """
    raw = props.get("options")
    if not isinstance(raw, list) or not raw:
        return fallback[:MAX_OPTIONS], True
    labels: list[str] = []
    for opt in raw:
        if isinstance(opt, str):
            labels.append(opt)
        elif isinstance(opt, dict) and isinstance(opt.get("label"), str):
            labels.append(opt["label"])
    return [label for label in labels if label][:MAX_OPTIONS], False


def rating_max(props: dict[str, Any]) -> int:
    """``props.max`` clamped to 1..10; 5 when missing or not a number."""
    value = props.get("max", 5)
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        number = 5
    return max(1, min(10, number))


def _label(element: Element, default: str) -> str:
    return element.content if element.content else default


def _text(kind: BlockKind, default: str) -> Callable[[Element, dict[str, Any]], PreviewBlock]:
    def rule(element: Element, props: dict[str, Any]) -> PreviewBlock:
        return PreviewBlock(kind=kind, element_type=element.type, label=_label(element, default))

    return rule


def _media(element: Element, props: dict[str, Any]) -> PreviewBlock:
    return PreviewBlock(
        kind="media",
        element_type=element.type,
        label=element.content or element.type.value.capitalize(),
        placeholder=not element.content,
    )


def _choice(element: Element, props: dict[str, Any]) -> PreviewBlock:
    options, placeholder = option_labels(props, ["Option A", "Option B", "Option C"])
    return PreviewBlock(
        kind="choice",
        element_type=element.type,
        label=_label(element, "Question"),
        options=options,
        multi=element.type == ElementType.multiple_choice,
        placeholder=placeholder,
    )


def _ranking(element: Element, props: dict[str, Any]) -> PreviewBlock:
    options, placeholder = option_labels(props, ["Item 1", "Item 2", "Item 3"])
    return PreviewBlock(
        kind="ranking",
        element_type=element.type,
        label=_label(element, "Ranking"),
        options=options,
        placeholder=placeholder,
    )


def _rating(element: Element, props: dict[str, Any]) -> PreviewBlock:
    scale_type = props.get("scaleType")
    if scale_type not in ("stars", "hearts", "numbers"):
        scale_type = "stars"
    count = rating_max(props)
    if scale_type == "numbers":
        glyphs = [str(i) for i in range(1, count + 1)]
    else:
        glyphs = [RATING_GLYPHS[scale_type]] * count
    min_label = props.get("minLabel")
    max_label = props.get("maxLabel")
    return PreviewBlock(
        kind="rating",
        element_type=element.type,
        label=_label(element, "Rating"),
        glyphs=glyphs,
        min_label=min_label if isinstance(min_label, str) and min_label else None,
        max_label=max_label if isinstance(max_label, str) and max_label else None,
    )


_RULES: dict[ElementType, Callable[[Element, dict[str, Any]], PreviewBlock]] = {
    ElementType.header: _text("heading", "Header"),
    ElementType.subheader: _text("heading", "Subheader"),
    ElementType.paragraph: _text("text", "Paragraph"),
    ElementType.button: _text("button", "Button"),
    ElementType.image: _media,
    ElementType.video: _media,
    ElementType.group: _text("group", "Group"),
    ElementType.single_choice: _choice,
    ElementType.multiple_choice: _choice,
    ElementType.input: _text("input", "Text input"),
    ElementType.file: _text("file", "File upload"),
    ElementType.date: _text("date", "Date input"),
    ElementType.date_input: _text("date", "Date input"),
    ElementType.rating: _rating,
    ElementType.ranking: _ranking,
}

_missing = set(ElementType) - set(_RULES)
if _missing:
    raise RuntimeError(f"No preview rule for: {sorted(t.value for t in _missing)}")


def describe_element(element: Element) -> PreviewBlock:
    return _RULES[element.type](element, element.props or {})


def describe_letter(letter: Letter) -> list[ScreenPreview]:
    """One preview per screen in order, covering root elements only."""
    previews: list[ScreenPreview] = []
    for screen in letter.sorted_screens():
        roots = screen.root_elements()
        explicit = screen.style.justify_content if screen.style else None
        if explicit:
            justify = explicit
        elif screen.mode == ScreenMode.scroll and len(roots) > 1:
            justify = "space-evenly"
        else:
            justify = "center"
        previews.append(
            ScreenPreview(
                order=screen.order,
                mode=screen.mode,
                justify=justify,
                blocks=[describe_element(el) for el in roots],
            )
        )
    return previews
