"""Arrange renderables in a rows x columns grid."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from mosaic.tui.components.placeholder import PlaceHolder
from mosaic.tui.layout import hstack, pad as hpad, vertical_pad, vstack
from mosaic.tui.renderable import Renderable, Stack

Layout = tuple[Optional[int], Optional[int]]
Aspect = Union[float, tuple[float, float]]

DEFAULT_ASPECT = (16, 9)
DEFAULT_CELL = (16, 9)


class Grid(Stack):
    """A grid of equally sized cells; ``layout`` is ``(rows, cols)``."""

    def __init__(self, stack: Renderable, layout: tuple[int, int]) -> None:
        super().__init__(stack.segments, "vertical")
        self.layout = layout

    def __repr__(self) -> str:
        rows, cols = self.layout
        return f"<Grid {rows}x{cols} {self.measure.width}x{self.measure.height}>"


def fit_aspect(n: int, aspect: Aspect = DEFAULT_ASPECT) -> tuple[int, int]:
    """Pick ``(rows, cols)`` for ``n`` cells so that ``cols / rows`` follows ``aspect``.

    Start from the largest ``w:h`` shaped grid that holds at most ``n``
    cells, then grow it one dimension at a time (rows first for tall
    aspects, columns first otherwise) until it holds all of them.
    """
    if isinstance(aspect, tuple):
        w, h = aspect
    else:
        w, h = aspect, 1
    if w <= 0 or h <= 0:
        raise ValueError(f"aspect must be positive, got {aspect!r}")
    if n <= 0:
        return 1, 1

    factor = math.sqrt(n / (w * h))
    cols = max(1, math.floor(w * factor))
    rows = max(1, math.floor(h * factor))

    grow_rows = w < h
    while rows * cols < n:
        if grow_rows:
            rows += 1
        else:
            cols += 1
        grow_rows = not grow_rows
    return rows, cols


def _resolve_layout(n: int, layout: Layout | None, aspect: Aspect | None) -> tuple[int, int]:
    if layout is None:
        return fit_aspect(n, aspect if aspect is not None else DEFAULT_ASPECT)

    rows, cols = layout
    if rows is None and cols is None:
        return fit_aspect(n, aspect if aspect is not None else DEFAULT_ASPECT)
    if rows is None:
        rows = max(1, math.ceil(n / cols))
    elif cols is None:
        cols = max(1, math.ceil(n / rows))
    if rows * cols < n:
        raise ValueError(
            f"layout {rows}x{cols} has {rows * cols} cells for {n} renderables"
        )
    return rows, cols


def _split_pad(pad: int | Sequence[int]) -> tuple[int, int]:
    if isinstance(pad, int):
        px = py = pad
    elif isinstance(pad, Sequence) and len(pad) == 2:
        px, py = pad
    else:
        raise ValueError(f"pad must be an int or a (columns, rows) pair, got {pad!r}")
    if not (isinstance(px, int) and isinstance(py, int)) or px < 0 or py < 0:
        raise ValueError(f"pad amounts must be non-negative ints, got {pad!r}")
    return px, py


def _is_matrix(renderables: Sequence) -> bool:
    return bool(renderables) and all(isinstance(r, (list, tuple)) for r in renderables)


def _fit_cell(r: Renderable, width: int, height: int) -> Renderable:
    if r.measure.width < width:
        r = hpad(r, width, "center")
    if r.measure.height < height:
        r = vertical_pad(r, height, "center")
    return r


def grid(
    renderables: Sequence[Renderable] | Sequence[Sequence[Renderable]] | None = None,
    *,
    layout: Layout | None = None,
    pad: int | Sequence[int] = 0,
    aspect: Aspect | None = None,
    placeholder: Renderable | None = None,
) -> Grid:
    """Lay ``renderables`` out row-major in a grid of equal cells.

    ``renderables`` is either a flat sequence or a list of rows, in which case
    the rows fix the layout. With a flat sequence the layout is taken from
    ``layout`` (either dimension may be ``None`` and is then inferred from the
    number of renderables) or, failing that, from ``aspect``. Without any
    renderables ``layout`` is required and every cell is a placeholder.

    Every cell is as large as the largest renderable; smaller renderables are
    centered in their cell and empty cells get ``placeholder`` (a hatch of
    the cell size by default). ``pad`` is the gap between cells, either one
    int for both directions or ``(columns, rows)``.
    """
    px, py = _split_pad(pad)

    if not renderables:
        if layout is None or layout[0] is None or layout[1] is None:
            raise ValueError("grid needs either renderables or a complete layout")
        rows, cols = layout
        cell = placeholder if placeholder is not None else PlaceHolder(*DEFAULT_CELL)
        cells: list[Renderable] = [cell] * (rows * cols)
    else:
        if _is_matrix(renderables):
            matrix = [list(row) for row in renderables]
            rows, cols = len(matrix), max(len(row) for row in matrix)
            flat: list[Renderable | None] = []
            for row in matrix:
                flat.extend(row)
                flat.extend([None] * (cols - len(row)))
        else:
            flat = list(renderables)
            rows, cols = _resolve_layout(len(flat), layout, aspect)
            flat.extend([None] * (rows * cols - len(flat)))

        supplied = [r for r in flat if r is not None]
        width = max(r.measure.width for r in supplied)
        height = max(r.measure.height for r in supplied)
        if placeholder is not None and len(supplied) < len(flat):
            width = max(width, placeholder.measure.width)
            height = max(height, placeholder.measure.height)
        filler = placeholder if placeholder is not None else PlaceHolder(width, height)
        cells = [_fit_cell(r if r is not None else filler, width, height) for r in flat]

    rows_of_cells = [
        hstack(*cells[i * cols : (i + 1) * cols], pad=px) for i in range(rows)
    ]
    return Grid(vstack(*rows_of_cells, pad=py), (rows, cols))
