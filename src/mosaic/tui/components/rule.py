"""Horizontal and vertical rules."""

from __future__ import annotations

from typing import Callable, Union

from mosaic.tui.renderable import Renderable
from mosaic.tui.segment import Alignment, Segment, split_padding
from mosaic.tui.utils import terminal_size, truncate_to_width, visible_width

SizeSource = Union[int, Renderable, None]


def titled_rule(width: int, title: str | None, char: str, justify: Alignment = "center") -> tuple[str, str, str]:
    """Split a ``width``-column rule around ``title``.

    Returns ``(left, title, right)`` where ``left`` and ``right`` are runs of
    ``char`` and ``title`` is surrounded by one space on each side. When the
    title does not fit, it is truncated; with fewer than 4 columns the title
    is dropped.
    """
    if not title or width < 4:
        return char * width, "", ""
    title = " " + truncate_to_width(title, width - 4, ellipsis="…") + " "
    left, right = split_padding(width - visible_width(title), justify)
    return char * left, title, char * right


class HLine(Renderable):
    """A one-row horizontal rule, optionally with a title embedded in it.

    ``width`` may be an int, another renderable (to match its width), or
    ``None`` for the full terminal width.
    """

    def __init__(
        self,
        width: SizeSource = None,
        title: str | None = None,
        *,
        style: Callable[[str], str] | None = None,
        char: str = "─",
        justify: Alignment = "center",
    ) -> None:
        if width is None:
            width = terminal_size()[0]
        elif isinstance(width, Renderable):
            width = width.measure.width

        left, label, right = titled_rule(width, title, char, justify)
        if style:
            text = style(left) + label + style(right) if label else style(left)
        else:
            text = left + label + right
        super().__init__([Segment(text, width)])


class VLine(Renderable):
    """A one-column vertical rule.

    ``height`` may be an int, another renderable (to match its height), or
    ``None`` for the full terminal height.
    """

    def __init__(
        self,
        height: SizeSource = None,
        *,
        style: Callable[[str], str] | None = None,
        char: str = "│",
    ) -> None:
        if height is None:
            height = terminal_size()[1]
        elif isinstance(height, Renderable):
            height = height.measure.height

        cell = Segment(style(char) if style else char, 1)
        super().__init__([cell] * height)
