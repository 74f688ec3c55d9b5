"""Text renderable - multi-line text, optionally wrapped to a fixed width."""

from __future__ import annotations

from typing import Callable

from mosaic.tui.measure import Measure
from mosaic.tui.renderable import Renderable
from mosaic.tui.segment import Alignment, Segment, split_padding
from mosaic.tui.utils import wrap_text_with_ansi


class Text(Renderable):
    """Styled text laid out as a block.

    Without ``width`` every physical line is kept as is and the block is as
    wide as its longest line. With ``width`` the text is word-wrapped to that
    many columns (words longer than the width are broken) and every line is
    justified within it.
    """

    def __init__(
        self,
        text: str = "",
        width: int | None = None,
        style: Callable[[str], str] | None = None,
        justify: Alignment = "left",
    ) -> None:
        self.text = text
        self.style = style
        self.justify = justify

        # Replace tabs with 3 spaces
        normalized = text.replace("\t", "   ")
        if width is None:
            lines = normalized.split("\n")
            width = Measure.of(lines).width
        else:
            lines = wrap_text_with_ansi(normalized, width)

        segments: list[Segment] = []
        for line in lines:
            seg = Segment(style(line) if style else line)
            left, right = split_padding(max(0, width - seg.width), justify)
            segments.append(seg.padded(left, right))
        super().__init__(segments)
