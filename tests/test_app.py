"""Tests for mosaic.tui.app -- construction checks, focus and drawing."""

from __future__ import annotations

import logging

import pytest

from mosaic.tui.app import App
from mosaic.tui.components import Spacer
from mosaic.tui.compositor import Leaf
from mosaic.tui.config import LiveConfig
from mosaic.tui.controls import Controls, quit_display
from mosaic.tui.errors import ConstructionError
from mosaic.tui.measure import Measure
from mosaic.tui.renderable import Renderable

from .virtual_terminal import VirtualTerminal


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Counter:
    """Counts the keys it receives."""

    def __init__(self, width: int, height: int) -> None:
        self.measure = Measure(width, height)
        self.keys: list[str] = []

    def frame(self) -> Renderable:
        return Spacer(self.measure.width, self.measure.height, char=str(len(self.keys)))

    def handle_input(self, key: str) -> None:
        self.keys.append(key)


RULES = {("a", "right"): "b", ("b", "left"): "a"}


def make_app(**kwargs) -> App:
    widgets = kwargs.pop("widgets", {"a": Spacer(20, 9), "b": Spacer(20, 9)})
    kwargs.setdefault("terminal", VirtualTerminal())
    kwargs.setdefault("config", LiveConfig(refresh_interval=0, write_log_path=""))
    return App(
        Leaf("a") * Leaf("b"),
        widgets,
        kwargs.pop("transition_rules", RULES),
        width=40,
        height=10,
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    """Validation performed by the constructor."""

    def test_exact_fit_is_accepted(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mosaic.tui.app"):
            app = make_app()
        assert app.measure == Measure(40, 10)
        assert caplog.records == []

    def test_first_widget_starts_active(self) -> None:
        assert make_app().active == "a"

    def test_name_mismatch(self) -> None:
        with pytest.raises(ConstructionError, match="Mismatch"):
            make_app(widgets={"a": Spacer(20, 9), "c": Spacer(20, 9)})

    def test_too_wide(self) -> None:
        with pytest.raises(ConstructionError, match="width"):
            make_app(widgets={"a": Spacer(21, 9), "b": Spacer(20, 9)})

    def test_too_tall_for_the_focus_row(self) -> None:
        with pytest.raises(ConstructionError, match="height"):
            make_app(widgets={"a": Spacer(20, 10), "b": Spacer(20, 9)})

    def test_smaller_widget_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mosaic.tui.app"):
            make_app(widgets={"a": Spacer(15, 5), "b": Spacer(20, 9)})
        messages = [r.getMessage() for r in caplog.records]
        assert any("'a' has width 15" in m for m in messages)
        assert any("'a' has height 5" in m for m in messages)

    def test_unknown_transition_target(self) -> None:
        with pytest.raises(ConstructionError, match="unknown widget"):
            make_app(transition_rules={("a", "right"): "z"})

    def test_defaults_to_terminal_size(self) -> None:
        app = App(
            Leaf("only"),
            {"only": Spacer(10, 5)},
            terminal=VirtualTerminal(rows=6, columns=10),
            config=LiveConfig(write_log_path=""),
        )
        assert app.measure == Measure(10, 6)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


class TestTransitions:
    """The (active, key) -> active state machine."""

    def test_present_rule_moves_focus(self) -> None:
        app = make_app()
        assert app.execute_transition_rule("right") is True
        assert app.active == "b"

    def test_absent_rule_is_a_no_op(self) -> None:
        app = make_app()
        for key in ("left", "up", "x", "enter"):
            assert app.execute_transition_rule(key) is False
            assert app.active == "a"

    def test_each_key_moves_once(self) -> None:
        app = make_app()
        app.execute_transition_rule("right")
        app.execute_transition_rule("right")
        assert app.active == "b"
        app.execute_transition_rule("left")
        assert app.active == "a"

    def test_keys_drive_transitions(self) -> None:
        terminal = VirtualTerminal()
        app = make_app(terminal=terminal)
        terminal.queue_keys("right")
        assert app.update() is True
        assert app.active == "b"

    def test_unhandled_keys_reach_the_active_widget(self) -> None:
        counter = Counter(20, 9)
        terminal = VirtualTerminal()
        app = make_app(terminal=terminal, widgets={"a": counter, "b": Spacer(20, 9)})
        terminal.queue_keys("x", "y", "right", "z")
        app.update()
        assert counter.keys == ["x", "y"]
        assert app.active == "b"

    def test_quit_key(self) -> None:
        terminal = VirtualTerminal()
        app = make_app(terminal=terminal)
        terminal.queue_keys("q")
        assert app.update() is False
        assert terminal.output == ""

    def test_custom_controls(self) -> None:
        terminal = VirtualTerminal()
        app = make_app(terminal=terminal, controls=Controls({"x": quit_display}))
        terminal.queue_keys("q", "right")
        assert app.update() is True
        assert app.active == "a"
        terminal.queue_keys("x")
        assert app.update() is False


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


class TestFrame:
    """Focus indicator and compositing."""

    def test_active_widget_gets_a_rule(self) -> None:
        app = make_app(
            widgets={"a": Spacer(20, 9, char="a"), "b": Spacer(20, 9, char="b")}
        )
        content = app.frame()
        assert content.measure == Measure(40, 10)
        assert content.lines[0] == "─" * 20 + " " * 20
        assert content.lines[1] == "a" * 20 + "b" * 20

    def test_rule_follows_focus(self) -> None:
        app = make_app()
        app.execute_transition_rule("right")
        assert app.frame().lines[0] == " " * 20 + "─" * 20

    def test_widgets_with_frame(self) -> None:
        counter = Counter(20, 9)
        counter.keys.append("k")
        app = make_app(widgets={"a": counter, "b": Spacer(20, 9)})
        assert app.frame().lines[1].startswith("1" * 20)

    def test_on_draw_runs_before_every_frame(self) -> None:
        calls = []
        app = make_app(on_draw=calls.append)
        app.frame()
        app.frame()
        assert calls == [app, app]

    def test_help_lists_transition_rules(self) -> None:
        terminal = VirtualTerminal()
        app = make_app(terminal=terminal)
        terminal.queue_keys("h")
        app.update()
        assert app.help_shown is True
        assert "Transition rules" in terminal.output
        assert "right moves from a to b" in terminal.output

    def test_widget_help_shows_docstring(self) -> None:
        terminal = VirtualTerminal()
        app = make_app(terminal=terminal, widgets={"a": Counter(20, 9), "b": Spacer(20, 9)})
        terminal.queue_keys("w")
        app.update()
        assert app.widget_help_shown is True
        assert "Counts the keys it receives." in terminal.output
