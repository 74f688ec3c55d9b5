"""Compositor: split a screen area into named regions and render them.

A layout is a tree of :class:`HSplit` / :class:`VSplit` nodes with
:class:`Leaf` regions at the bottom::

    layout = Leaf("menu") * (Leaf("top") / Leaf("bottom"))

``a * b`` splits horizontally (``a`` on the left) and ``a / b`` vertically
(``a`` on top), both evenly; use ``HSplit(a, b, ratio)`` for uneven splits.
The first child of a split gets ``floor(ratio * size)`` columns or rows and
the second child gets the remainder, so regions always tile the area.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from mosaic.tui.components.placeholder import PlaceHolder
from mosaic.tui.errors import ConstructionError
from mosaic.tui.layout import hstack, pad, vertical_pad, vstack
from mosaic.tui.measure import Measure
from mosaic.tui.renderable import Renderable


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


class _Node:
    def __mul__(self, other: LayoutNode) -> HSplit:
        return HSplit(self, other)

    def __truediv__(self, other: LayoutNode) -> VSplit:
        return VSplit(self, other)


@dataclass(frozen=True)
class Leaf(_Node):
    name: str


@dataclass(frozen=True)
class HSplit(_Node):
    left: LayoutNode
    right: LayoutNode
    ratio: float = 0.5


@dataclass(frozen=True)
class VSplit(_Node):
    top: LayoutNode
    bottom: LayoutNode
    ratio: float = 0.5


LayoutNode = Union[Leaf, HSplit, VSplit]


class Compositor:
    """Named regions of a ``width`` x ``height`` area, with stored content.

    Attributes
    ----------
    elements:
        Region name to :class:`Rect`, in layout order.
    measure:
        The total area.
    """

    def __init__(self, layout: LayoutNode, width: int, height: int) -> None:
        self.layout = layout
        self.measure = Measure(width=width, height=height)
        self.elements: dict[str, Rect] = {}
        self._allocate(layout, Rect(0, 0, width, height))
        self._content: dict[str, Renderable | None] = dict.fromkeys(self.elements)

    def _allocate(self, node: LayoutNode, rect: Rect) -> None:
        if isinstance(node, Leaf):
            if node.name in self.elements:
                raise ConstructionError(f"duplicate region name {node.name!r} in layout")
            self.elements[node.name] = rect
            return

        if not isinstance(node, (HSplit, VSplit)):
            raise ConstructionError(f"invalid layout node {node!r}")
        if not 0 < node.ratio < 1:
            raise ConstructionError(f"split ratio must be between 0 and 1, got {node.ratio}")

        if isinstance(node, HSplit):
            first = math.floor(node.ratio * rect.width)
            self._allocate(node.left, Rect(rect.x, rect.y, first, rect.height))
            self._allocate(
                node.right,
                Rect(rect.x + first, rect.y, rect.width - first, rect.height),
            )
        else:
            first = math.floor(node.ratio * rect.height)
            self._allocate(node.top, Rect(rect.x, rect.y, rect.width, first))
            self._allocate(
                node.bottom,
                Rect(rect.x, rect.y + first, rect.width, rect.height - first),
            )

    def update(self, name: str, content: Renderable) -> None:
        """Store ``content`` for region ``name``; raises ``KeyError`` if unknown."""
        if name not in self.elements:
            raise KeyError(name)
        self._content[name] = content

    def render(self) -> Renderable:
        """Stack every region's content following the layout tree."""
        return self._render(self.layout)

    def _render(self, node: LayoutNode) -> Renderable:
        if isinstance(node, HSplit):
            return hstack(self._render(node.left), self._render(node.right))
        if isinstance(node, VSplit):
            return vstack(self._render(node.top), self._render(node.bottom))

        rect = self.elements[node.name]
        content = self._content[node.name]
        if content is None:
            return PlaceHolder(rect.width, rect.height)
        if content.measure.width < rect.width:
            content = pad(content, rect.width, "left")
        if content.measure.height < rect.height:
            content = vertical_pad(content, rect.height, "top")
        return content
