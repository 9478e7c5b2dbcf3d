"""Renderer-neutral preview descriptors."""

from eletters.preview.rules import (
    MAX_OPTIONS,
    PreviewBlock,
    ScreenPreview,
    describe_element,
    describe_letter,
    option_labels,
    rating_max,
)

__all__ = [
    "MAX_OPTIONS",
    "PreviewBlock",
    "ScreenPreview",
    "describe_element",
    "describe_letter",
    "option_labels",
    "rating_max",
]
