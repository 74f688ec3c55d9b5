"""Panel component - a rounded box around content, with in-place padding."""

from __future__ import annotations

from typing import Callable

from mosaic.tui.errors import PaddingTooSmall
from mosaic.tui.renderable import Renderable, RenderableLike
from mosaic.tui.segment import Alignment, Segment, blank, split_padding
from mosaic.tui.components.rule import titled_rule
from mosaic.tui.components.text import Text
from mosaic.tui.utils import truncate_to_width

DEFAULT_PANEL_WIDTH = 88

# Rounded box glyphs
TOP_LEFT = "╭"
TOP_RIGHT = "╮"
BOTTOM_LEFT = "╰"
BOTTOM_RIGHT = "╯"
HORIZONTAL = "─"
VERTICAL = "│"


class Panel(Renderable):
    """A bordered box around optional content.

    The box is ``width`` columns wide including its borders; without an
    explicit width it fits the content (or falls back to
    ``DEFAULT_PANEL_WIDTH`` when empty). ``height`` likewise includes the
    top and bottom borders, so an empty panel without a height is two rows
    tall. String content is word-wrapped to the inner width; renderable
    content wider than the inner width is truncated line by line.

    :meth:`pad` and :meth:`vertical_pad` add blank margins around the box in
    place, rebuilding the panel's segments and measure.
    """

    def __init__(
        self,
        content: RenderableLike | None = None,
        *,
        width: int | None = None,
        height: int | None = None,
        title: str | None = None,
        style: Callable[[str], str] | None = None,
        padding: int = 2,
        justify: Alignment = "left",
    ) -> None:
        self.title = title
        self.style = style
        self.justify = justify

        if width is None:
            if content is None:
                width = DEFAULT_PANEL_WIDTH
            else:
                natural = content if isinstance(content, Renderable) else Text(content)
                width = natural.measure.width + 2 + 2 * padding
        if width < 2:
            raise ValueError(f"Panel width must be at least 2, got {width}")
        self.padding = min(padding, (width - 2) // 2)
        inner = width - 2 - 2 * self.padding

        if content is None:
            body: list[Segment] = []
        elif isinstance(content, Renderable):
            body = content.segments
        else:
            body = Text(content, width=inner, justify=justify).segments
        # wrapping cannot split a word below one column or a wide character
        body = [
            s if s.width <= inner else Segment(truncate_to_width(s.text, inner, ellipsis=""))
            for s in body
        ]

        if height is not None:
            if height < 2:
                raise ValueError(f"Panel height must be at least 2, got {height}")
            body = body[: height - 2]
            body += [blank(0)] * (height - 2 - len(body))

        self._box = self._draw_box(body, width, inner)
        # top, right, bottom, left
        self.margins = [0, 0, 0, 0]
        super().__init__(self._box)

    def _border(self, text: str) -> str:
        return self.style(text) if self.style and text else text

    def _draw_box(self, body: list[Segment], width: int, inner: int) -> list[Segment]:
        left, label, right = titled_rule(width - 2, self.title, HORIZONTAL)
        top = (
            self._border(TOP_LEFT + left)
            + label
            + self._border(right + TOP_RIGHT)
        )
        bottom = self._border(BOTTOM_LEFT + HORIZONTAL * (width - 2) + BOTTOM_RIGHT)
        side = self._border(VERTICAL)

        lines = [Segment(top)]
        for seg in body:
            fill_left, fill_right = split_padding(inner - seg.width, self.justify)
            row = seg.padded(self.padding + fill_left, self.padding + fill_right)
            lines.append(Segment(side + row.text + side))
        lines.append(Segment(bottom))
        return lines

    def _rebuild(self) -> None:
        top, right, bottom, left = self.margins
        rows = [seg.padded(left, right) for seg in self._box]
        width = self._box[0].width + left + right
        rows = [blank(width)] * top + rows + [blank(width)] * bottom
        self._set_segments(rows)

    # -- in-place padding ---------------------------------------------------

    def pad(
        self,
        left: int | None = None,
        right: int | None = None,
        *,
        width: int | None = None,
        method: Alignment = "center",
    ) -> Panel:
        """Add blank columns around the panel, in place.

        Either give explicit ``left``/``right`` amounts, or a target ``width``
        that is reached by splitting the difference with ``method``. Raises
        :class:`PaddingTooSmall` if ``width`` is narrower than the panel.
        """
        if width is not None:
            if width < self.measure.width:
                raise PaddingTooSmall(width, self.measure.width, "width")
            left, right = split_padding(width - self.measure.width, method)
        if (left or 0) < 0 or (right or 0) < 0:
            raise ValueError(f"padding amounts must be non-negative, got {left} and {right}")
        self.margins[3] += left or 0
        self.margins[1] += right or 0
        self._rebuild()
        return self

    def vertical_pad(
        self,
        above: int | None = None,
        below: int | None = None,
        *,
        height: int | None = None,
        method: Alignment = "center",
    ) -> Panel:
        """Add blank rows above and below the panel, in place."""
        if height is not None:
            if height < self.measure.height:
                raise PaddingTooSmall(height, self.measure.height, "height")
            above, below = split_padding(height - self.measure.height, method)
        if (above or 0) < 0 or (below or 0) < 0:
            raise ValueError(f"padding amounts must be non-negative, got {above} and {below}")
        self.margins[0] += above or 0
        self.margins[2] += below or 0
        self._rebuild()
        return self
