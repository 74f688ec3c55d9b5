"""PlaceHolder renderable: a dimmed diagonal hatch used to fill empty space."""

from __future__ import annotations

from typing import Callable

from mosaic.tui.renderable import Renderable
from mosaic.tui.segment import Segment


def dim(text: str) -> str:
    return f"\x1b[2m{text}\x1b[22m"


class PlaceHolder(Renderable):
    """A ``width`` x ``height`` block of ``╲`` on alternating cells."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        style: Callable[[str], str] | None = dim,
        char: str = "╲",
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(
                f"PlaceHolder size must be non-negative, got {width}x{height}"
            )
        self.style = style
        segments = []
        for row in range(height):
            line = "".join(
                char if (row + col) % 2 == 0 else " " for col in range(width)
            )
            if style and line:
                line = style(line)
            segments.append(Segment(line, width))
        super().__init__(segments)

    @classmethod
    def like(cls, renderable: Renderable, **kwargs) -> PlaceHolder:
        """A placeholder with the same size as ``renderable``."""
        return cls(renderable.measure.width, renderable.measure.height, **kwargs)
