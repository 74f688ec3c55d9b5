"""Tests for mosaic.tui.live -- diff redraw, throttling and session lifecycle."""

from __future__ import annotations

import io
import logging
import re

import pytest

from mosaic.tui import live as live_module
from mosaic.tui.components import Spacer, Text
from mosaic.tui.config import LiveConfig
from mosaic.tui.errors import TerminalWriteFailure
from mosaic.tui.live import LiveDisplay, LiveInternals, redraw
from mosaic.tui.renderable import Renderable
from mosaic.tui.terminal import ERASE_LINE, HIDE_CURSOR, SHOW_CURSOR

from .virtual_terminal import VirtualTerminal


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Static(LiveDisplay):
    """A live display showing fixed lines."""

    def __init__(self, *lines: str, **kwargs) -> None:
        kwargs.setdefault("config", LiveConfig(refresh_interval=0, poll_interval=0, write_log_path=""))
        super().__init__(**kwargs)
        self.content: Renderable = Renderable.from_lines(lines)
        self.pressed: list[str] = []

    def frame(self) -> Renderable:
        return self.content

    def key_press(self, key: str) -> None:
        self.pressed.append(key)
        if key == "enter":
            self.retval = "chosen"


class Broken(LiveDisplay):
    def frame(self) -> Renderable:
        raise RuntimeError("boom")


def lines(*items: str) -> Renderable:
    return Renderable.from_lines(items)


class Screen:
    """Replays cursor movement, line erasure and newlines onto numbered rows."""

    TOKEN = re.compile(r"\x1b\[(\d*)([AB])|\x1b\[2K|\n|[^\x1b\n]+")

    def __init__(self, row: int = 5) -> None:
        self.row = row
        self.rows: dict[int, str] = {}

    def feed(self, data: str) -> Screen:
        for match in self.TOKEN.finditer(data):
            token = match.group(0)
            if match.group(2) == "A":
                self.row -= int(match.group(1) or 1)
            elif match.group(2) == "B":
                self.row += int(match.group(1) or 1)
            elif token == ERASE_LINE:
                self.rows.pop(self.row, None)
            elif token == "\n":
                self.row += 1
            else:
                self.rows[self.row] = self.rows.get(self.row, "") + token
        return self

    def occupied(self) -> dict[int, str]:
        return {row: text for row, text in self.rows.items() if text.strip()}


# ---------------------------------------------------------------------------
# redraw
# ---------------------------------------------------------------------------


class TestRedraw:
    """The escape sequences produced for one frame."""

    def test_first_paint(self) -> None:
        out = io.StringIO()
        assert redraw(out, None, lines("ab", "cd")) == 0
        assert out.getvalue() == "\nab\ncd\n"

    def test_same_height(self) -> None:
        out = io.StringIO()
        erased = redraw(out, lines("ab", "cd"), lines("ef", "gh"))
        assert erased == 1
        assert out.getvalue() == (
            "\x1b[3A"
            + ERASE_LINE + "\x1b[1B"
            + ERASE_LINE + "ef\n"
            + ERASE_LINE + "gh\n"
        )

    def test_shrinking_frame_blanks_stale_rows(self) -> None:
        out = io.StringIO()
        erased = redraw(out, lines(*"abcde"), lines("x", "y"))
        assert erased == 4
        assert out.getvalue().startswith("\x1b[6A")
        assert out.getvalue().count("\x1b[1B") == 4
        assert out.getvalue().count(ERASE_LINE) == 6

    def test_growing_frame_erases_nothing(self) -> None:
        out = io.StringIO()
        erased = redraw(out, lines("a"), lines(*"abcd"))
        assert erased == 0
        assert "\x1b[1B" not in out.getvalue()
        assert out.getvalue().count(ERASE_LINE) == 4

    @pytest.mark.parametrize("prev,new", [(1, 1), (3, 1), (1, 3), (5, 5), (0, 2)])
    def test_erase_count(self, prev: int, new: int) -> None:
        out = io.StringIO()
        erased = redraw(out, Spacer(3, prev), Spacer(3, new))
        assert erased == max(0, prev + 1 - new)

    def test_idempotent(self) -> None:
        content = Text("hello\nworld")
        first, second = io.StringIO(), io.StringIO()
        redraw(first, None, content)
        erased = redraw(second, content, content)
        assert erased == 1
        written = second.getvalue().split(ERASE_LINE)[2:]
        assert written == ["hello\n", "world\n"]
        assert content.measure.height == 2

    def test_frame_stays_on_the_same_rows(self) -> None:
        content = lines("AAA", "BBB")
        screen = Screen()
        out = io.StringIO()
        redraw(out, None, content)
        after_first = screen.feed(out.getvalue()).occupied()
        cursor = screen.row
        for _ in range(3):
            out = io.StringIO()
            redraw(out, content, content)
            assert screen.feed(out.getvalue()).occupied() == after_first
            assert screen.row == cursor
        assert after_first == {6: "AAA", 7: "BBB"}

    def test_shrinking_frame_leaves_no_stale_rows(self) -> None:
        screen = Screen()
        out = io.StringIO()
        redraw(out, None, lines(*"abcde"))
        redraw(out, lines(*"abcde"), lines("x", "y"))
        assert screen.feed(out.getvalue()).occupied() == {9: "x", 10: "y"}

    def test_first_paint_keeps_the_row_above(self) -> None:
        screen = Screen()
        screen.rows[4] = "$ prompt"
        out = io.StringIO()
        redraw(out, None, lines("a"))
        redraw(out, lines("a"), lines("b"))
        assert screen.feed(out.getvalue()).occupied() == {4: "$ prompt", 6: "b"}


# ---------------------------------------------------------------------------
# Throttling
# ---------------------------------------------------------------------------


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(live_module.time, "monotonic", fake)
    return fake


class TestShouldUpdate:
    """Redraws are limited to one per refresh interval."""

    def make(self) -> Static:
        return Static("x", terminal=VirtualTerminal(), config=LiveConfig(write_log_path=""))

    def test_first_call_is_true(self, clock: FakeClock) -> None:
        assert self.make().should_update() is True

    def test_throttled_within_interval(self, clock: FakeClock) -> None:
        live = self.make()
        live.should_update()
        clock.now += 0.05
        assert live.should_update() is False

    def test_true_after_interval_and_resets(self, clock: FakeClock) -> None:
        live = self.make()
        live.should_update()
        clock.now += 0.1
        assert live.should_update() is True
        clock.now += 0.05
        assert live.should_update() is False

    def test_idle_tick_does_not_draw(self, clock: FakeClock) -> None:
        terminal = VirtualTerminal()
        live = Static("x", terminal=terminal, config=LiveConfig(write_log_path=""))
        assert live.update() is True
        terminal.clear_buffer()
        assert live.update() is True
        assert terminal.output == ""


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdate:
    """One refresh cycle."""

    def test_first_update_paints(self) -> None:
        terminal = VirtualTerminal()
        live = Static("hello", "world", terminal=terminal)
        assert live.update() is True
        assert terminal.output == "\nhello\nworld\n"
        assert live.internals.previous_frame is live.content

    def test_output_is_written_once_per_cycle(self) -> None:
        terminal = VirtualTerminal()
        live = Static("a", "b", "c", terminal=terminal)
        live.update()
        live.update()
        assert terminal.write_count == 2
        assert terminal.flush_count == 2

    def test_quit_stops_without_drawing(self) -> None:
        terminal = VirtualTerminal()
        live = Static("hello", terminal=terminal)
        terminal.queue_keys("q")
        assert live.update() is False
        assert terminal.output == ""

    def test_key_press_sees_every_key(self) -> None:
        terminal = VirtualTerminal()
        live = Static("hello", terminal=terminal)
        terminal.queue_keys("a", "up", "q", "b")
        live.update()
        assert live.pressed == ["a", "up", "q"]

    def test_help_is_stacked_below(self) -> None:
        terminal = VirtualTerminal()
        live = Static("hello", terminal=terminal)
        terminal.queue_keys("h")
        live.update()
        assert live.help_shown is True
        assert "Controls" in terminal.output
        assert "q: Quit." in terminal.output
        assert live.internals.previous_frame.lines[0].startswith("hello")

    def test_frame_is_abstract(self) -> None:
        live = LiveDisplay(terminal=VirtualTerminal(), config=LiveConfig(write_log_path=""))
        with pytest.raises(NotImplementedError):
            live.frame()

    def test_write_failure_propagates(self) -> None:
        live = Static("hello", terminal=VirtualTerminal(fail_write=True))
        with pytest.raises(TerminalWriteFailure):
            live.update()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    """Raw mode and cursor handling around a session."""

    def test_start_enters_raw_mode_and_hides_cursor(self) -> None:
        terminal = VirtualTerminal()
        live = Static("x", terminal=terminal).start()
        assert terminal.raw_enabled is True
        assert live.internals.raw_mode_enabled is True
        assert terminal.output == HIDE_CURSOR

    def test_stop_restores_terminal(self) -> None:
        terminal = VirtualTerminal()
        live = Static("x", terminal=terminal).start()
        live.stop()
        assert terminal.raw_enabled is False
        assert terminal.cursor_visible is True
        assert terminal.output.endswith(SHOW_CURSOR)

    def test_stop_is_idempotent(self) -> None:
        terminal = VirtualTerminal()
        live = Static("x", terminal=terminal).start()
        live.stop()
        live.stop()
        assert terminal.output.count(SHOW_CURSOR) == 1

    def test_raw_mode_failure_is_a_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        terminal = VirtualTerminal(fail_raw=True)
        with caplog.at_level(logging.WARNING, logger="mosaic.tui.live"):
            live = Static("x", terminal=terminal).start()
        assert live.internals.raw_mode_enabled is False
        assert terminal.cursor_visible is True
        assert any("raw mode" in r.getMessage() for r in caplog.records)
        assert live.update() is True

    def test_transient_erases_footprint(self) -> None:
        terminal = VirtualTerminal()
        config = LiveConfig(refresh_interval=0, transient=True, write_log_path="")
        live = Static("a", "b", terminal=terminal, config=config).start()
        live.update()
        terminal.clear_buffer()
        live.stop()
        assert terminal.output == (
            "\x1b[3A" + (ERASE_LINE + "\x1b[1B") * 3 + "\x1b[3A" + SHOW_CURSOR
        )

    def test_context_manager(self) -> None:
        terminal = VirtualTerminal()
        with Static("x", terminal=terminal) as live:
            assert terminal.raw_enabled is True
            live.update()
        assert terminal.raw_enabled is False
        assert terminal.cursor_visible is True

    def test_internals_default_state(self) -> None:
        internals = LiveInternals(VirtualTerminal(), LiveConfig(write_log_path=""))
        assert internals.previous_frame is None
        assert internals.last_update is None
        assert internals.raw_mode_enabled is False
        assert internals.buffer.getvalue() == ""


class TestPlay:
    """The blocking driver loop."""

    def test_runs_until_quit(self) -> None:
        terminal = VirtualTerminal()
        live = Static("x", terminal=terminal)
        terminal.queue_keys("a", "enter", "escape")
        assert live.play() == "chosen"
        assert live.pressed == ["a", "enter", "escape"]
        assert terminal.raw_enabled is False

    def test_stop_runs_on_error(self) -> None:
        terminal = VirtualTerminal()
        live = Broken(terminal=terminal, config=LiveConfig(refresh_interval=0, write_log_path=""))
        with pytest.raises(RuntimeError, match="boom"):
            live.play()
        assert terminal.raw_enabled is False
        assert terminal.cursor_visible is True

    def test_stop_runs_on_write_failure(self) -> None:
        terminal = VirtualTerminal(fail_write=True)
        live = Static("x", terminal=terminal)
        with pytest.raises(TerminalWriteFailure):
            live.play()
        assert terminal.raw_enabled is False
