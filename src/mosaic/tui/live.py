"""Live displays: a poll / throttle / diff-redraw loop over a terminal.

A :class:`LiveDisplay` subclass implements :meth:`LiveDisplay.frame`; the
loop reads pending keys, dispatches them through the display's
:class:`~mosaic.tui.controls.Controls`, and, at most once per refresh
interval, redraws the terminal rows the display occupies.

Redraw strategy (see :func:`redraw`):

1. First paint: one blank separator row, then every line followed by a
   newline. The frame ends on the rows just above the cursor.
2. Later paints: move the cursor up over the previous frame and the
   separator row above it, blank the rows the new frame does not cover,
   then erase and rewrite each line of the new frame.

With an unchanged height the separator is the one blanked row, so the
frame lands on the same rows every cycle.

All output for one cycle is staged in an ``io.StringIO`` buffer and written
to the terminal with a single ``write`` followed by ``flush``.
"""

from __future__ import annotations

import io
import logging
import time
from typing import TextIO

from mosaic.tui.components.text import Text
from mosaic.tui.config import LiveConfig
from mosaic.tui.controls import Controls, live_controls
from mosaic.tui.errors import RawModeUnavailable
from mosaic.tui.keys import KeyId
from mosaic.tui.renderable import Renderable
from mosaic.tui.terminal import (
    ERASE_LINE,
    ProcessTerminal,
    Terminal,
    cursor_down_seq,
    cursor_up_seq,
)

logger = logging.getLogger(__name__)


def redraw(out: TextIO, previous: Renderable | None, content: Renderable) -> int:
    """Write the escape sequences that turn ``previous`` into ``content``.

    Returns the number of rows that were blanked above the new frame because
    it is shorter than the previous one plus its separator row.
    """
    lines = content.lines
    if previous is None:
        out.write("\n")
        for line in lines:
            out.write(line + "\n")
        return 0

    nlines = previous.measure.height + 1
    nnew = len(lines)
    out.write(cursor_up_seq(nlines))

    erased = max(0, nlines - nnew)
    for _ in range(erased):
        out.write(ERASE_LINE + cursor_down_seq(1))
    for line in lines:
        out.write(ERASE_LINE + line + "\n")
    return erased


# ---------------------------------------------------------------------------
# LiveInternals
# ---------------------------------------------------------------------------


class LiveInternals:
    """Terminal-side state of one live session.

    Holds the output buffer, the terminal, the last drawn frame, whether raw
    mode could be enabled and when the last redraw happened.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        config: LiveConfig | None = None,
    ) -> None:
        self.config = config if config is not None else LiveConfig.from_env()
        self.terminal: Terminal = (
            terminal
            if terminal is not None
            else ProcessTerminal(write_log_path=self.config.write_log_path)
        )
        self.buffer = io.StringIO()
        self.previous_frame: Renderable | None = None
        self.raw_mode_enabled = False
        self.last_update: float | None = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Enter raw mode and hide the cursor.

        Failing to enter raw mode is not fatal: a warning is logged and the
        session continues with whatever input the terminal delivers.
        """
        if self._active:
            return
        self._active = True
        try:
            self.terminal.enable_raw()
            self.raw_mode_enabled = True
        except RawModeUnavailable as exc:
            logger.warning("Unable to enter raw mode: %s", exc)
            self.raw_mode_enabled = False

        if self.raw_mode_enabled and self.config.hide_cursor:
            self.terminal.hide_cursor()
            self.terminal.flush()

    def render(self, content: Renderable) -> int:
        """Stage the redraw of ``content`` in the buffer and remember it."""
        erased = redraw(self.buffer, self.previous_frame, content)
        self.previous_frame = content
        return erased

    def flush(self) -> None:
        """Write the staged output to the terminal in one go."""
        output = self.buffer.getvalue()
        self.buffer.seek(0)
        self.buffer.truncate()
        if output:
            self.terminal.write(output)
        self.terminal.flush()

    def _erase_footprint(self) -> None:
        rows = self.previous_frame.measure.height + 1
        self.buffer.write(cursor_up_seq(rows))
        for _ in range(rows):
            self.buffer.write(ERASE_LINE + cursor_down_seq(1))
        self.buffer.write(cursor_up_seq(rows))
        self.previous_frame = None

    def stop(self, transient: bool | None = None) -> None:
        """Restore the terminal: show the cursor and leave raw mode.

        Safe to call more than once. Raw mode is left even when writing to
        the terminal fails.
        """
        if not self._active:
            return
        self._active = False
        if transient is None:
            transient = self.config.transient
        try:
            if transient and self.previous_frame is not None:
                self._erase_footprint()
            self.flush()
            self.terminal.show_cursor()
            self.terminal.flush()
        finally:
            if self.raw_mode_enabled:
                self.terminal.disable_raw()
                self.raw_mode_enabled = False


# ---------------------------------------------------------------------------
# LiveDisplay
# ---------------------------------------------------------------------------


class LiveDisplay:
    """Base class of everything that redraws itself in the terminal.

    Subclasses implement :meth:`frame`. Drive a display either with
    :meth:`play`, or manually::

        with MyDisplay() as live:
            while live.update():
                ...
    """

    def __init__(
        self,
        *,
        terminal: Terminal | None = None,
        config: LiveConfig | None = None,
        controls: Controls | None = None,
    ) -> None:
        self.config = config if config is not None else LiveConfig.from_env()
        self.internals = LiveInternals(terminal, self.config)
        self.controls = controls if controls is not None else live_controls()
        self.help_shown = False
        self.retval = None

    # -- hooks --------------------------------------------------------------

    def frame(self) -> Renderable:
        """Return the current content of the display."""
        raise NotImplementedError(f"{type(self).__name__} must implement frame()")

    def key_press(self, key: KeyId) -> None:
        """Called for every key before it is dispatched to the controls."""

    def help_message(self) -> str:
        return "\n".join(["Controls", *self.controls.describe()])

    def help_content(self) -> Renderable | None:
        """Extra content stacked below the frame (the help, when shown)."""
        if not self.help_shown:
            return None
        return Text(self.help_message())

    # -- refresh cycle ------------------------------------------------------

    def should_update(self) -> bool:
        """Throttle redraws to one per ``config.refresh_interval``."""
        now = time.monotonic()
        last = self.internals.last_update
        if last is None or now - last >= self.config.refresh_interval:
            self.internals.last_update = now
            return True
        return False

    def keyboard_input(self) -> bool:
        """Dispatch every pending key; return ``True`` if one asked to stop."""
        terminal = self.internals.terminal
        while True:
            key = terminal.read_key()
            if key is None:
                return False
            self.key_press(key)
            if self.controls.dispatch(self, key):
                logger.debug("Stop requested by %r", key)
                return True

    def update(self) -> bool:
        """Run one refresh cycle; ``False`` means the display should stop."""
        if self.keyboard_input():
            return False
        if not self.should_update():
            return True

        content = self.frame()
        extra = self.help_content()
        if extra is not None:
            content = content / extra

        erased = self.internals.render(content)
        logger.debug("Redrew %d lines, erased %d", content.measure.height, erased)
        self.internals.flush()
        return True

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> LiveDisplay:
        self.internals.start()
        return self

    def stop(self) -> None:
        self.internals.stop()

    def play(self):
        """Run until a control asks to stop; return :attr:`retval`."""
        try:
            self.start()
            while self.update():
                time.sleep(self.config.poll_interval)
        finally:
            self.stop()
        return self.retval

    def __enter__(self) -> LiveDisplay:
        try:
            return self.start()
        except BaseException:
            self.stop()
            raise

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
