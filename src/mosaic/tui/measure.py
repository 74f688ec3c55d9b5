"""The ``Measure`` value type: the width/height footprint of a renderable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from mosaic.tui.utils import visible_width


@dataclass(frozen=True)
class Measure:
    """Printable width and line count of a block of terminal text."""

    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Measure dimensions must be non-negative, got {self.width}x{self.height}"
            )

    @classmethod
    def of(cls, lines: Iterable[str]) -> Measure:
        """Measure a sequence of lines: widest line by number of lines."""
        widths = [visible_width(line) for line in lines]
        return cls(width=max(widths, default=0), height=len(widths))

    def __str__(self) -> str:
        return f"Measure(w: {self.width}, h: {self.height})"
