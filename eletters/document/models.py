"""Pydantic models for letters, screens, and elements."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNTITLED = "Untitled"

# camelCase on the wire, snake_case in Python; both accepted on input.
_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_WIRE_OPEN = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class ElementType(str, Enum):
    """Closed set of element kinds a screen can hold."""

    header = "header"
    subheader = "subheader"
    paragraph = "paragraph"
    image = "image"
    video = "video"
    button = "button"
    group = "group"
    single_choice = "single-choice"
    multiple_choice = "multiple-choice"
    input = "input"
    file = "file"
    date = "date"
    date_input = "date-input"
    rating = "rating"
    ranking = "ranking"


class ScreenMode(str, Enum):
    """How a screen presents its elements."""

    scroll = "scroll"
    single_screen = "single-screen"


class ElementStyle(BaseModel):
    """Text/box styling for a single element. Unknown keys are kept."""

    model_config = _WIRE_OPEN

    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    font_size: float | None = None
    align: Literal["left", "center", "right"] | None = None
    font_family: str | None = None
    width: float | None = None
    height: float | None = None
    color: str | None = None
    border_radius: float | None = None


class ScreenStyle(BaseModel):
    """Background and layout styling for a screen. Unknown keys are kept."""

    model_config = _WIRE_OPEN

    background: str | None = None
    background_image: str | None = None
    background_overlay_color: str | None = None
    background_overlay_opacity: float | None = None
    background_size: Literal["cover", "contain"] | None = None
    background_position: str | None = None
    text_color: str | None = None
    accent_color: str | None = None
    button_color: str | None = None
    align_items: Literal["start", "center", "end"] | None = None
    justify_content: Literal["start", "center", "end"] | None = None
    variant_key: str | None = None
    element_spacing: float | None = None


class Element(BaseModel):
    """Atomic content or question block placed on a screen."""

    model_config = _WIRE

    id: str
    type: ElementType
    content: str | None = None
    props: dict[str, Any] | None = None
    style: ElementStyle | None = None
    parent_id: str | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class Screen(BaseModel):
    """One page of a letter."""

    model_config = _WIRE

    id: str
    order: int
    mode: ScreenMode = ScreenMode.scroll
    elements: list[Element] = Field(default_factory=list)
    style: ScreenStyle | None = None
    title: str | None = None
    cta_label: str | None = None
    nav_next_label: str | None = None
    nav_back_label: str | None = None
    nav_done_label: str | None = None
    nav_close_label: str | None = None

    def root_elements(self) -> list[Element]:
        return [el for el in self.elements if el.is_root]


class Letter(BaseModel):
    """A complete multi-screen document."""

    model_config = _WIRE

    id: str
    title: str = UNTITLED
    description: str | None = None
    language: str | None = None
    brand_id: str | None = None
    screens: list[Screen] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def default_blank_title(cls, v: str) -> str:
        if not v.strip():
            return UNTITLED
        return v

    def sorted_screens(self) -> list[Screen]:
        """Screens in presentation order (by ``order``, stable for ties)."""
        return sorted(self.screens, key=lambda s: s.order)

    def first_screen(self) -> Screen | None:
        screens = self.sorted_screens()
        return screens[0] if screens else None

    def iter_elements(self) -> Iterator[Element]:
        for screen in self.sorted_screens():
            yield from screen.elements

    def to_json(self) -> dict[str, Any]:
        """Wire representation: camelCase keys, no null fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
