"""The ``Renderable`` base type and the ``Stack`` composite.

A renderable is an ordered list of :class:`~mosaic.tui.segment.Segment`
lines plus their :class:`~mosaic.tui.measure.Measure`. Every line of a
renderable has the same printable width, which is the measure's width, and
the measure's height is the number of lines. Constructors right-pad shorter
lines so the invariant holds for any input.

``a * b`` places ``b`` to the right of ``a`` and ``a / b`` places ``b``
below ``a``. Plain strings are accepted on either side.
"""

from __future__ import annotations

from typing import Iterable, Literal, Union

from mosaic.tui.measure import Measure
from mosaic.tui.segment import Segment, blank


def _uniform(segments: Iterable[Segment]) -> tuple[list[Segment], Measure]:
    segs = list(segments)
    width = max((s.width for s in segs), default=0)
    padded = [s if s.width == width else s + blank(width - s.width) for s in segs]
    return padded, Measure(width=width, height=len(padded))


class Renderable:
    """A measured block of styled terminal lines."""

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        self._set_segments(segments)

    def _set_segments(self, segments: Iterable[Segment]) -> None:
        self.segments, self.measure = _uniform(segments)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Renderable:
        """Build a plain renderable from pre-styled lines."""
        return Renderable(Segment(line) for line in lines)

    # -- convenience accessors ---------------------------------------------

    @property
    def width(self) -> int:
        return self.measure.width

    @property
    def height(self) -> int:
        return self.measure.height

    @property
    def lines(self) -> list[str]:
        return [s.text for s in self.segments]

    def __str__(self) -> str:
        return "\n".join(s.text for s in self.segments)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.measure.width}x{self.measure.height}>"

    # -- stacking operators ------------------------------------------------

    def __mul__(self, other: RenderableLike) -> Stack:
        from mosaic.tui.layout import hstack

        if not isinstance(other, (Renderable, str)):
            return NotImplemented
        return hstack(self, other)

    def __rmul__(self, other: RenderableLike) -> Stack:
        from mosaic.tui.layout import hstack

        if not isinstance(other, str):
            return NotImplemented
        return hstack(other, self)

    def __truediv__(self, other: RenderableLike) -> Stack:
        from mosaic.tui.layout import vstack

        if not isinstance(other, (Renderable, str)):
            return NotImplemented
        return vstack(self, other)

    def __rtruediv__(self, other: RenderableLike) -> Stack:
        from mosaic.tui.layout import vstack

        if not isinstance(other, str):
            return NotImplemented
        return vstack(other, self)


class Stack(Renderable):
    """Result of placing renderables side by side or on top of each other."""

    def __init__(
        self,
        segments: Iterable[Segment],
        orientation: Literal["horizontal", "vertical"],
    ) -> None:
        super().__init__(segments)
        self.orientation = orientation


RenderableLike = Union[Renderable, str]
