"""StdinBuffer buffers raw input and returns complete sequences.

Reads from a terminal can end in the middle of an escape sequence (an arrow
key is three bytes). Without buffering, a partial sequence would be decoded
as a lone Escape followed by ordinary characters.

The buffer is driven by polling: :meth:`StdinBuffer.process` is called with
whatever bytes were available, and :meth:`StdinBuffer.flush` is called on a
poll that found no new input, which releases a dangling ``ESC`` as the Escape
key.
"""

from __future__ import annotations

import re
from typing import Literal

ESC = "\x1b"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _is_complete_sequence(data: str) -> SequenceStatus:
    """Check if *data* is a complete escape sequence or needs more input."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        if after_esc.startswith("[M"):
            return "complete" if len(data) >= 6 else "incomplete"
        return _is_complete_csi_sequence(data)

    # OSC / DCS / APC strings end with ST (or BEL for OSC)
    if after_esc[0] in "]P_":
        if data.endswith(f"{ESC}\\") or (after_esc[0] == "]" and data.endswith("\x07")):
            return "complete"
        return "incomplete"

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> SequenceStatus:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    last_char = payload[-1]
    if not 0x40 <= ord(last_char) <= 0x7E:
        return "incomplete"

    # SGR mouse reports contain "M"/"m" only as their final byte
    if payload.startswith("<") and not _SGR_MOUSE_RE.match(payload):
        return "incomplete"
    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is an unfinished
    escape sequence at the end of the buffer.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        for seq_end in range(1, len(remaining) + 1):
            candidate = remaining[:seq_end]
            if _is_complete_sequence(candidate) == "complete":
                sequences.append(candidate)
                pos += seq_end
                break
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Accumulates raw input and hands out complete sequences."""

    def __init__(self) -> None:
        self._buffer: str = ""

    def process(self, data: str) -> list[str]:
        """Feed *data* and return every sequence it completes."""
        self._buffer += data
        sequences, self._buffer = _extract_complete_sequences(self._buffer)
        return sequences

    def flush(self) -> list[str]:
        """Release whatever is buffered as a single sequence."""
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._buffer = ""

    def get_buffer(self) -> str:
        return self._buffer
