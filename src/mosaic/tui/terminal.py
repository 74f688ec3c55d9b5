"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol (the capability the live runtime drives)
and a concrete ``ProcessTerminal`` implementation that manages raw mode,
non-blocking key reads, cursor visibility and line erasing via ANSI escape
sequences. The sequence builders are exported so that output can be staged
in a buffer before it reaches the terminal.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from collections import deque
from typing import Protocol, TextIO

from mosaic.tui.errors import RawModeUnavailable, TerminalWriteFailure
from mosaic.tui.keys import KeyId, parse_key
from mosaic.tui.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants (VT100 subset)
# ---------------------------------------------------------------------------

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
ERASE_LINE = "\x1b[2K"

_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"


def cursor_up_seq(n: int = 1) -> str:
    """``CSI n A``; empty for ``n <= 0``."""
    return _CURSOR_UP_FMT.format(n) if n > 0 else ""


def cursor_down_seq(n: int = 1) -> str:
    """``CSI n B``; empty for ``n <= 0``."""
    return _CURSOR_DOWN_FMT.format(n) if n > 0 else ""


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal operations a live display needs."""

    def enable_raw(self) -> None: ...

    def disable_raw(self) -> None: ...

    def read_key(self) -> KeyId | None: ...

    def write(self, data: str) -> None: ...

    def flush(self) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def cursor_up(self, n: int = 1) -> None: ...

    def cursor_down(self, n: int = 1) -> None: ...

    def erase_line(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by ``sys.stdin`` / ``sys.stdout``.

    Raw mode is cbreak mode (no line buffering, no echo, output processing
    left on so ``"\\n"`` still returns the carriage). Keys are read with a
    zero-timeout ``select`` so :meth:`read_key` never blocks.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        write_log_path: str = "",
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._write_log_path = write_log_path
        self._original_termios: list | None = None
        self._stdin_buffer = StdinBuffer()
        self._pending: deque[str] = deque()

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    @property
    def raw_mode_enabled(self) -> bool:
        return self._original_termios is not None

    # -- raw mode -----------------------------------------------------------

    def enable_raw(self) -> None:
        """Switch stdin to cbreak mode, remembering the previous attributes.

        Raises :class:`RawModeUnavailable` when stdin is not a terminal.
        """
        if self._original_termios is not None:
            return
        try:
            fd = self._stdin.fileno()
            if not os.isatty(fd):
                raise RawModeUnavailable("stdin is not a terminal")
            self._original_termios = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except (termios.error, ValueError, OSError) as exc:
            self._original_termios = None
            raise RawModeUnavailable(str(exc)) from exc

    def disable_raw(self) -> None:
        """Restore the attributes saved by :meth:`enable_raw`."""
        if self._original_termios is None:
            return
        try:
            termios.tcsetattr(
                self._stdin.fileno(), termios.TCSADRAIN, self._original_termios
            )
        finally:
            self._original_termios = None
            self._stdin_buffer.clear()
            self._pending.clear()

    # -- input --------------------------------------------------------------

    def read_key(self) -> KeyId | None:
        """Return the next pending key, or ``None`` when nothing is waiting.

        Sequences that do not decode to a key identifier are returned raw.
        """
        if not self._pending:
            chunk = self._read_available()
            if chunk:
                self._pending.extend(self._stdin_buffer.process(chunk))
            else:
                self._pending.extend(self._stdin_buffer.flush())

        if not self._pending:
            return None
        sequence = self._pending.popleft()
        return parse_key(sequence) or sequence

    def _read_available(self) -> str:
        try:
            fd = self._stdin.fileno()
            ready, _, _ = select.select([fd], [], [], 0)
            if not ready:
                return ""
            raw = os.read(fd, 4096)
        except (ValueError, OSError):
            return ""
        return raw.decode("utf-8", errors="replace")

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write *data* to stdout and optionally to the write log."""
        try:
            self._stdout.write(data)
        except OSError as exc:
            raise TerminalWriteFailure(f"terminal write failed: {exc}") from exc

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                logger.debug("Could not append to write log %s", self._write_log_path)

    def flush(self) -> None:
        try:
            self._stdout.flush()
        except OSError as exc:
            raise TerminalWriteFailure(f"terminal flush failed: {exc}") from exc

    # -- cursor / line manipulation ----------------------------------------

    def cursor_up(self, n: int = 1) -> None:
        self.write(cursor_up_seq(n))

    def cursor_down(self, n: int = 1) -> None:
        self.write(cursor_down_seq(n))

    def erase_line(self) -> None:
        self.write(ERASE_LINE)

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)
