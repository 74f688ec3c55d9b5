"""Layout algebra: padding, stacking and alignment of renderables.

Every function here is pure and returns new objects, except the in-place
alignment helpers (:func:`leftalign`, :func:`center`, :func:`rightalign`),
which call :meth:`Panel.pad` on the panels they are given.
"""

from __future__ import annotations

from typing import Sequence, Union

from mosaic.tui.components.panel import Panel
from mosaic.tui.components.spacer import Spacer
from mosaic.tui.components.text import Text
from mosaic.tui.errors import PaddingTooSmall
from mosaic.tui.renderable import Renderable, RenderableLike, Stack
from mosaic.tui.segment import Alignment, Segment, blank, split_padding
from mosaic.tui.utils import visible_width

__all__ = [
    "pad",
    "vertical_pad",
    "hstack",
    "vstack",
    "leftalign",
    "center",
    "rightalign",
    "leftaligned",
    "centered",
    "rightaligned",
    "lvstack",
    "cvstack",
    "rvstack",
]


def _as_renderable(content: RenderableLike) -> Renderable:
    if isinstance(content, Renderable):
        return content
    if isinstance(content, str):
        return Text(content)
    raise TypeError(f"cannot lay out {type(content).__name__!r}")


def _fill(extra: int, target: int, actual: int, method: Alignment, axis: str) -> tuple[int, int]:
    if target < actual:
        raise PaddingTooSmall(target, actual, axis)
    return split_padding(extra, method)


def _explicit(before: int, after: int) -> tuple[int, int]:
    if before < 0 or after < 0:
        raise ValueError(f"padding amounts must be non-negative, got {before} and {after}")
    return before, after


# ---------------------------------------------------------------------------
# Horizontal padding
# ---------------------------------------------------------------------------


def _pad_segment(seg: Segment, size: int, method: Union[Alignment, int]) -> Segment:
    if isinstance(method, int):
        return seg.padded(*_explicit(size, method))
    left, right = _fill(size - seg.width, size, seg.width, method, "width")
    return seg.padded(left, right)


def pad(content, width_or_left, method_or_right="center"):
    """Pad ``content`` horizontally with spaces.

    ``pad(content, width, method)`` fills up to ``width`` columns using the
    ``"left"``, ``"center"`` or ``"right"`` alignment rule, raising
    :class:`PaddingTooSmall` when the content is wider than ``width``.
    ``pad(content, left, right)`` adds exactly ``left`` and ``right`` spaces.

    Strings are padded line by line and returned as strings; segments and
    renderables are returned as new objects of the same kind (renderables
    come back as plain :class:`Renderable`).
    """
    if isinstance(content, Segment):
        return _pad_segment(content, width_or_left, method_or_right)

    if isinstance(content, str):
        lines = [Segment(line) for line in content.split("\n")]
        if not isinstance(method_or_right, int):
            widest = max(seg.width for seg in lines)
            if width_or_left < widest:
                raise PaddingTooSmall(width_or_left, widest, "width")
        padded = [_pad_segment(seg, width_or_left, method_or_right) for seg in lines]
        return str(Renderable(padded))

    if isinstance(content, Renderable):
        if not isinstance(method_or_right, int) and width_or_left < content.measure.width:
            raise PaddingTooSmall(width_or_left, content.measure.width, "width")
        return Renderable(
            _pad_segment(seg, width_or_left, method_or_right) for seg in content.segments
        )

    raise TypeError(f"cannot pad {type(content).__name__!r}")


# ---------------------------------------------------------------------------
# Vertical padding
# ---------------------------------------------------------------------------


def _vertical_amounts(height: int, height_or_above: int, method_or_below: Union[Alignment, int]) -> tuple[int, int]:
    if isinstance(method_or_below, int):
        return _explicit(height_or_above, method_or_below)
    return _fill(height_or_above - height, height_or_above, height, method_or_below, "height")


def vertical_pad(content, height_or_above, method_or_below="center"):
    """Pad ``content`` with blank rows above and below.

    ``vertical_pad(content, height, method)`` fills up to ``height`` rows
    with ``"top"`` (content first), ``"center"`` or ``"bottom"`` (content
    last); ``vertical_pad(content, above, below)`` adds explicit counts.
    Blank rows are as wide as the content.
    """
    if isinstance(content, str):
        lines = content.split("\n")
        width = max(visible_width(line) for line in lines)
        above, below = _vertical_amounts(len(lines), height_or_above, method_or_below)
        row = " " * width
        return "\n".join([row] * above + lines + [row] * below)

    if isinstance(content, Renderable):
        above, below = _vertical_amounts(content.measure.height, height_or_above, method_or_below)
        row = blank(content.measure.width)
        return Renderable([row] * above + content.segments + [row] * below)

    raise TypeError(f"cannot pad {type(content).__name__!r}")


# ---------------------------------------------------------------------------
# Stacking
# ---------------------------------------------------------------------------


def _hjoin(a: Renderable, b: Renderable) -> list[Segment]:
    height = max(a.measure.height, b.measure.height)
    left = a.segments + [blank(a.measure.width)] * (height - a.measure.height)
    right = b.segments + [blank(b.measure.width)] * (height - b.measure.height)
    return [l + r for l, r in zip(left, right)]


def _vjoin(a: Renderable, b: Renderable) -> list[Segment]:
    # narrower lines are right-padded by Renderable itself
    return a.segments + b.segments


def hstack(*renderables: RenderableLike, pad: int = 0) -> Renderable:
    """Place renderables side by side, left to right.

    The result is as wide as the sum of the widths (plus ``pad`` blank
    columns between neighbours) and as tall as the tallest element; shorter
    elements are padded at the bottom.
    """
    items = [_as_renderable(r) for r in renderables]
    if not items:
        return Renderable([])
    result = items[0]
    for item in items[1:]:
        if pad > 0:
            result = Stack(_hjoin(result, Spacer(pad, 0)), "horizontal")
        result = Stack(_hjoin(result, item), "horizontal")
    if not isinstance(result, Stack):
        result = Stack(result.segments, "horizontal")
    return result


def vstack(*renderables: RenderableLike, pad: int = 0) -> Renderable:
    """Place renderables on top of each other, first at the top.

    The result is as wide as the widest element (narrower lines are padded on
    the right) and as tall as the sum of the heights plus ``pad`` blank rows
    between neighbours.
    """
    items = [_as_renderable(r) for r in renderables]
    if not items:
        return Renderable([])
    result = items[0]
    for item in items[1:]:
        if pad > 0:
            result = Stack(_vjoin(result, Spacer(0, pad)), "vertical")
        result = Stack(_vjoin(result, item), "vertical")
    if not isinstance(result, Stack):
        result = Stack(result.segments, "vertical")
    return result


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------


def _align_panels(panels: Sequence[Panel], method: Alignment) -> tuple[Panel, ...]:
    if not panels:
        return ()
    target = max(p.measure.width for p in panels)
    for p in panels:
        p.pad(width=target, method=method)
    return tuple(panels)


def leftalign(*panels: Panel) -> tuple[Panel, ...]:
    """Pad every panel on the right, in place, to the widest one."""
    return _align_panels(panels, "left")


def center(*panels: Panel) -> tuple[Panel, ...]:
    """Pad every panel on both sides, in place, to the widest one."""
    return _align_panels(panels, "center")


def rightalign(*panels: Panel) -> tuple[Panel, ...]:
    """Pad every panel on the left, in place, to the widest one."""
    return _align_panels(panels, "right")


def _aligned(renderables: Sequence[RenderableLike], method: Alignment) -> list[Renderable]:
    items = [_as_renderable(r) for r in renderables]
    if not items:
        return []
    target = max(r.measure.width for r in items)
    return [pad(r, target, method) for r in items]


def leftaligned(*renderables: RenderableLike) -> list[Renderable]:
    return _aligned(renderables, "left")


def centered(*renderables: RenderableLike) -> list[Renderable]:
    return _aligned(renderables, "center")


def rightaligned(*renderables: RenderableLike) -> list[Renderable]:
    return _aligned(renderables, "right")


def lvstack(*renderables: RenderableLike, pad: int = 0) -> Renderable:
    """Left-align copies of ``renderables`` and stack them vertically."""
    return vstack(*leftaligned(*renderables), pad=pad)


def cvstack(*renderables: RenderableLike, pad: int = 0) -> Renderable:
    """Center copies of ``renderables`` and stack them vertically."""
    return vstack(*centered(*renderables), pad=pad)


def rvstack(*renderables: RenderableLike, pad: int = 0) -> Renderable:
    """Right-align copies of ``renderables`` and stack them vertically."""
    return vstack(*rightaligned(*renderables), pad=pad)
