"""Layout reflow between single-screen and per-question presentations."""

from eletters.layout.transformer import LAYOUT_MODES, LayoutMode, transform

__all__ = ["LAYOUT_MODES", "LayoutMode", "transform"]
