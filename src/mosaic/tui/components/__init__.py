"""Renderable components."""

from mosaic.tui.components.panel import DEFAULT_PANEL_WIDTH, Panel
from mosaic.tui.components.placeholder import PlaceHolder, dim
from mosaic.tui.components.rule import HLine, VLine
from mosaic.tui.components.spacer import Spacer
from mosaic.tui.components.text import Text

__all__ = [
    "DEFAULT_PANEL_WIDTH",
    "HLine",
    "Panel",
    "PlaceHolder",
    "Spacer",
    "Text",
    "VLine",
    "dim",
]
