"""Key bindings for live displays.

An *action* is a callable ``action(live, key) -> bool`` that returns ``True``
when the live display should stop. A :class:`Controls` object maps key
identifiers to actions, with an optional fallback for unbound keys. Every
live display owns its own ``Controls``; :func:`live_controls` and
:func:`app_controls` build fresh default sets.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Mapping

from mosaic.tui.keys import Key, KeyId

if TYPE_CHECKING:
    from mosaic.tui.live import LiveDisplay

logger = logging.getLogger(__name__)

Action = Callable[["LiveDisplay", KeyId], bool]

# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def quit_display(live: LiveDisplay, key: KeyId) -> bool:
    """Quit."""
    return True


def toggle_help(live: LiveDisplay, key: KeyId) -> bool:
    """Show or hide this help."""
    live.help_shown = not live.help_shown
    return False


def toggle_widget_help(live: LiveDisplay, key: KeyId) -> bool:
    """Show or hide help for the active widget."""
    live.widget_help_shown = not getattr(live, "widget_help_shown", False)
    return False


def execute_transition_rule(live: LiveDisplay, key: KeyId) -> bool:
    """Move focus between widgets.

    Keys that do not trigger a transition are forwarded to the active
    widget's ``handle_input`` when it has one.
    """
    if live.execute_transition_rule(key):
        return False
    widget = live.widgets[live.active]
    handler = getattr(widget, "handle_input", None)
    if handler is not None:
        handler(key)
    return False


# ---------------------------------------------------------------------------
# Controls
# ---------------------------------------------------------------------------


class Controls:
    """A key -> action table with an optional fallback action."""

    def __init__(
        self,
        bindings: Mapping[KeyId, Action] | None = None,
        fallback: Action | None = None,
    ) -> None:
        self.bindings: dict[KeyId, Action] = dict(bindings or {})
        self.fallback = fallback

    def bind(self, key: KeyId, action: Action) -> None:
        self.bindings[key] = action

    def dispatch(self, live: LiveDisplay, key: KeyId) -> bool:
        """Run the action bound to ``key``; return ``True`` to stop the display."""
        action = self.bindings.get(key, self.fallback)
        if action is None:
            return False
        logger.debug("Key %r -> %s", key, getattr(action, "__name__", action))
        return bool(action(live, key))

    def describe(self) -> list[str]:
        """One ``"key: description"`` line per binding."""
        lines = []
        for key, action in self.bindings.items():
            doc = (action.__doc__ or getattr(action, "__name__", "")).strip()
            lines.append(f"{key}: {doc.splitlines()[0] if doc else ''}")
        return lines


def live_controls() -> Controls:
    """Default bindings of a plain live display."""
    return Controls(
        {
            "q": quit_display,
            Key.escape: quit_display,
            Key.ctrl("c"): quit_display,
            "h": toggle_help,
        }
    )


def app_controls() -> Controls:
    """Default bindings of an :class:`~mosaic.tui.app.App`."""
    controls = live_controls()
    controls.bind("w", toggle_widget_help)
    controls.fallback = execute_transition_rule
    return controls
