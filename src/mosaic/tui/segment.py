"""``Segment``: one styled line of output with a known printable width."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from mosaic.tui.utils import strip_ansi, visible_width


@dataclass(frozen=True)
class Segment:
    """A single pre-rendered line.

    ``width`` is the number of terminal columns the line occupies, which
    differs from ``len(text)`` whenever the text carries escape codes or wide
    characters. It is computed from ``text`` unless given explicitly.
    """

    text: str
    width: int = field(default=-1)

    def __post_init__(self) -> None:
        if "\n" in self.text:
            raise ValueError("a Segment holds a single line; split the text first")
        if self.width < 0:
            object.__setattr__(self, "width", visible_width(self.text))

    @property
    def plain(self) -> str:
        """The text with escape sequences removed."""
        return strip_ansi(self.text)

    def padded(self, left: int, right: int) -> Segment:
        """A new segment with ``left``/``right`` spaces around this one."""
        if left == 0 and right == 0:
            return self
        return Segment(" " * left + self.text + " " * right, self.width + left + right)

    def __add__(self, other: Segment) -> Segment:
        if not isinstance(other, Segment):
            return NotImplemented
        return Segment(self.text + other.text, self.width + other.width)

    def __str__(self) -> str:
        return self.text


def blank(width: int) -> Segment:
    """A segment of ``width`` spaces."""
    return Segment(" " * width, width)


Alignment = Literal["left", "center", "right", "top", "bottom"]


def split_padding(extra: int, method: Alignment) -> tuple[int, int]:
    """Split ``extra`` fill into ``(before, after)`` amounts.

    ``left``/``top`` keep the content first (all fill after it),
    ``right``/``bottom`` put all fill before it, and ``center`` puts the
    smaller half before.
    """
    if method in ("left", "top"):
        return 0, extra
    if method in ("right", "bottom"):
        return extra, 0
    if method == "center":
        return extra // 2, extra - extra // 2
    raise ValueError(f"unknown alignment {method!r}")
