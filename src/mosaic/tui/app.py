"""App: widgets bound to compositor regions, with keyboard-driven focus.

An :class:`App` is a live display whose screen is split into named regions
by a :class:`~mosaic.tui.compositor.Compositor` layout, one widget per
region. One widget is *active*; transition rules move the focus between
widgets on key presses::

    app = App(
        Leaf("left") * Leaf("right"),
        {"left": menu, "right": preview},
        {("left", "right"): "right", ("right", "left"): "left"},
    )
    app.play()

The active widget is drawn under a horizontal rule, the others under a
blank row, so every region keeps one row for that indicator.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Mapping, Protocol, Union

from mosaic.tui.compositor import Compositor, LayoutNode
from mosaic.tui.components.rule import HLine
from mosaic.tui.components.spacer import Spacer
from mosaic.tui.components.text import Text
from mosaic.tui.config import LiveConfig
from mosaic.tui.controls import Controls, app_controls
from mosaic.tui.errors import ConstructionError
from mosaic.tui.keys import KeyId
from mosaic.tui.live import LiveDisplay
from mosaic.tui.measure import Measure
from mosaic.tui.renderable import Renderable
from mosaic.tui.terminal import Terminal

logger = logging.getLogger(__name__)


class Widget(Protocol):
    """Anything with a size that can produce its current content.

    ``handle_input(key)`` is optional -- checked at the call site via
    ``getattr``.
    """

    measure: Measure

    def frame(self) -> Renderable: ...


WidgetLike = Union[Renderable, Widget]
TransitionRules = Mapping[tuple[str, KeyId], str]


def render_widget(widget: WidgetLike) -> Renderable:
    """Current content of ``widget``; plain renderables are their own content."""
    frame = getattr(widget, "frame", None)
    if frame is not None:
        return frame()
    return widget


class App(LiveDisplay):
    """A widget container with a focus state machine.

    Parameters
    ----------
    layout:
        Split tree whose leaf names are the widget names.
    widgets:
        Widget per region name. The first one starts active.
    transition_rules:
        ``(active, key) -> new active`` focus moves.
    width, height:
        Total size; defaults to the terminal size.
    on_draw:
        Called with the app before every frame.

    Raises :class:`ConstructionError` when the widget names differ from the
    region names, when a transition rule names an unknown widget, or when a
    widget does not fit its region (one row of every region is kept for the
    focus indicator).
    """

    def __init__(
        self,
        layout: LayoutNode,
        widgets: Mapping[str, WidgetLike],
        transition_rules: TransitionRules | None = None,
        *,
        width: int | None = None,
        height: int | None = None,
        controls: Controls | None = None,
        on_draw: Callable[[App], Any] | None = None,
        terminal: Terminal | None = None,
        config: LiveConfig | None = None,
    ) -> None:
        super().__init__(
            terminal=terminal,
            config=config,
            controls=controls if controls is not None else app_controls(),
        )
        if width is None:
            width = self.internals.terminal.columns
        if height is None:
            height = self.internals.terminal.rows

        self.compositor = Compositor(layout, width, height)
        self.measure = self.compositor.measure
        self.widgets: dict[str, WidgetLike] = dict(widgets)
        self.transition_rules: dict[tuple[str, KeyId], str] = dict(transition_rules or {})
        self._check_widgets()
        self._check_transition_rules()

        self.active: str = next(iter(self.widgets))
        self.on_draw = on_draw
        self.widget_help_shown = False

    def _check_widgets(self) -> None:
        layout_names = set(self.compositor.elements)
        widget_names = set(self.widgets)
        if layout_names != widget_names:
            raise ConstructionError(
                f"Mismatch between widget names {sorted(widget_names)} "
                f"and layout names {sorted(layout_names)}"
            )

        for name, rect in self.compositor.elements.items():
            size = self.widgets[name].measure
            if size.width > rect.width:
                raise ConstructionError(
                    f"Widget {name!r} has width {size.width} but the region is {rect.width} wide"
                )
            if size.height > rect.height - 1:
                raise ConstructionError(
                    f"Widget {name!r} has height {size.height} but at most "
                    f"{rect.height - 1} rows fit in its region"
                )
            if size.width < rect.width:
                logger.warning(
                    "Widget %r has width %d but its region is %d wide",
                    name, size.width, rect.width,
                )
            if size.height < rect.height - 1:
                logger.warning(
                    "Widget %r has height %d but its region fits %d rows",
                    name, size.height, rect.height - 1,
                )

    def _check_transition_rules(self) -> None:
        for (source, key), target in self.transition_rules.items():
            for name in (source, target):
                if name not in self.widgets:
                    raise ConstructionError(
                        f"Transition rule ({source!r}, {key!r}) -> {target!r} "
                        f"names unknown widget {name!r}"
                    )

    # -- focus ---------------------------------------------------------------

    def execute_transition_rule(self, key: KeyId) -> bool:
        """Move focus according to ``(active, key)``; return whether it moved."""
        target = self.transition_rules.get((self.active, key))
        if target is None:
            return False
        logger.debug("Focus moves from %r to %r on %r", self.active, target, key)
        self.active = target
        return True

    # -- help ----------------------------------------------------------------

    def help_message(self) -> str:
        lines = [super().help_message(), "", "Transition rules"]
        for (source, key), target in self.transition_rules.items():
            lines.append(f"{key} moves from {source} to {target}")
        return "\n".join(lines)

    def widget_help(self) -> str:
        doc = inspect.getdoc(self.widgets[self.active])
        return doc or f"No help available for {self.active!r}"

    def help_content(self) -> Renderable | None:
        content = super().help_content()
        if self.widget_help_shown:
            widget_help = Text(self.widget_help())
            content = widget_help if content is None else content / widget_help
        return content

    # -- drawing -------------------------------------------------------------

    def frame(self) -> Renderable:
        if self.on_draw is not None:
            self.on_draw(self)

        for name, widget in self.widgets.items():
            rect = self.compositor.elements[name]
            if name == self.active:
                header: Renderable = HLine(rect.width)
            else:
                header = Spacer(rect.width, 1)
            self.compositor.update(name, header / render_widget(widget))
        return self.compositor.render()
