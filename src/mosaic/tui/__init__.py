"""mosaic-tui: layout algebra for terminal renderables and live displays."""

# App and compositor
from mosaic.tui.app import App, Widget, render_widget
from mosaic.tui.compositor import Compositor, HSplit, Leaf, Rect, VSplit

# Components (re-exported from components package)
from mosaic.tui.components import (
    DEFAULT_PANEL_WIDTH,
    HLine,
    Panel,
    PlaceHolder,
    Spacer,
    Text,
    VLine,
    dim,
)

# Configuration
from mosaic.tui.config import LiveConfig

# Key bindings
from mosaic.tui.controls import (
    Action,
    Controls,
    app_controls,
    execute_transition_rule,
    live_controls,
    quit_display,
    toggle_help,
    toggle_widget_help,
)

# Errors
from mosaic.tui.errors import (
    ConstructionError,
    MosaicError,
    PaddingTooSmall,
    RawModeUnavailable,
    TerminalWriteFailure,
)

# Grid
from mosaic.tui.grid import Grid, fit_aspect, grid

# Keyboard input handling
from mosaic.tui.keys import Key, KeyId, matches_key, parse_key

# Layout algebra
from mosaic.tui.layout import (
    center,
    centered,
    cvstack,
    hstack,
    leftalign,
    leftaligned,
    lvstack,
    pad,
    rightalign,
    rightaligned,
    rvstack,
    vertical_pad,
    vstack,
)

# Live displays
from mosaic.tui.live import LiveDisplay, LiveInternals, redraw

# Measurement and renderables
from mosaic.tui.measure import Measure
from mosaic.tui.renderable import Renderable, RenderableLike, Stack
from mosaic.tui.segment import Segment, split_padding

# Stdin buffering
from mosaic.tui.stdin_buffer import StdinBuffer

# Terminal
from mosaic.tui.terminal import ProcessTerminal, Terminal

# Utilities
from mosaic.tui.utils import (
    strip_ansi,
    terminal_size,
    truncate_to_width,
    visible_width,
    wrap_text_with_ansi,
)

__all__ = [
    # App and compositor
    "App",
    "Widget",
    "render_widget",
    "Compositor",
    "HSplit",
    "Leaf",
    "Rect",
    "VSplit",
    # Components
    "DEFAULT_PANEL_WIDTH",
    "HLine",
    "Panel",
    "PlaceHolder",
    "Spacer",
    "Text",
    "VLine",
    "dim",
    # Configuration
    "LiveConfig",
    # Key bindings
    "Action",
    "Controls",
    "app_controls",
    "execute_transition_rule",
    "live_controls",
    "quit_display",
    "toggle_help",
    "toggle_widget_help",
    # Errors
    "ConstructionError",
    "MosaicError",
    "PaddingTooSmall",
    "RawModeUnavailable",
    "TerminalWriteFailure",
    # Grid
    "Grid",
    "fit_aspect",
    "grid",
    # Keyboard input handling
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # Layout algebra
    "center",
    "centered",
    "cvstack",
    "hstack",
    "leftalign",
    "leftaligned",
    "lvstack",
    "pad",
    "rightalign",
    "rightaligned",
    "rvstack",
    "vertical_pad",
    "vstack",
    # Live displays
    "LiveDisplay",
    "LiveInternals",
    "redraw",
    # Measurement and renderables
    "Measure",
    "Renderable",
    "RenderableLike",
    "Stack",
    "Segment",
    "split_padding",
    # Stdin buffering
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utilities
    "strip_ansi",
    "terminal_size",
    "truncate_to_width",
    "visible_width",
    "wrap_text_with_ansi",
]
