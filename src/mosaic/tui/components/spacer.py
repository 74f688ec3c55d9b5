"""Spacer renderable: a blank rectangle."""

from __future__ import annotations

from mosaic.tui.renderable import Renderable
from mosaic.tui.segment import Segment


class Spacer(Renderable):
    """A ``width`` x ``height`` block filled with ``char``."""

    def __init__(self, width: int, height: int, char: str = " ") -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Spacer size must be non-negative, got {width}x{height}")
        super().__init__([Segment(char * width, width)] * height)
