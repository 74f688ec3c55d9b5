"""Terminal text utilities: ANSI handling, width measurement, word wrapping.

Provides functions for measuring the printable width of styled text,
stripping escape codes, wrapping text with its styling carried across line
breaks, and truncating to a column budget.
"""

from __future__ import annotations

import os
import re
import sys
import unicodedata

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"              # CSI
    r"|\x1b\]8;;[^\x07]*\x07"               # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"    # APC
)

# SGR reset
RESET = "\x1b[0m"

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters and combining marks are zero width, emoji sequences
    (VS16, ZWJ, skin tones, flags) are two columns, everything else is
    delegated to wcwidth on the first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


# ---------------------------------------------------------------------------
# visible_width / strip_ansi
# ---------------------------------------------------------------------------


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from *text*."""
    return _STRIP_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the printable terminal width of *text*.

    * Strips ANSI escape sequences.
    * Treats tabs as 3 spaces.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    stripped = stripped.replace("\t", "   ")

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# extract_ansi_code
# ---------------------------------------------------------------------------


def extract_ansi_code(text: str, pos: int) -> tuple[str, int] | None:
    """Extract an escape sequence starting at *pos* in *text*.

    Returns ``(code, length)`` or ``None`` if there is no escape sequence at
    *pos*. Recognises CSI sequences and OSC/APC strings terminated by BEL or
    ST.
    """
    if pos + 1 >= len(text) or text[pos] != "\x1b":
        return None

    next_ch = text[pos + 1]

    if next_ch == "[":
        i = pos + 2
        while i < len(text):
            ch = text[i]
            if ch.isdigit() or ch in ";?":
                i += 1
                continue
            if ch.isalpha():
                return text[pos : i + 1], i + 1 - pos
            break
        return None

    if next_ch in "]_":
        i = pos + 2
        while i < len(text):
            if text[i] == "\x07":
                return text[pos : i + 1], i + 1 - pos
            if text[i] == "\x1b" and i + 1 < len(text) and text[i + 1] == "\\":
                return text[pos : i + 2], i + 2 - pos
            i += 1
    return None


# ---------------------------------------------------------------------------
# SgrState
# ---------------------------------------------------------------------------


class SgrState:
    """Track the SGR codes active at a point in a styled string.

    Every ``ESC[...m`` code seen since the last full reset is kept in order,
    so that the same styling can be re-opened at the start of a wrapped
    continuation line and closed at the end of the previous one.
    """

    def __init__(self) -> None:
        self._codes: list[str] = []

    def process(self, code: str) -> None:
        if not code.startswith("\x1b[") or not code.endswith("m"):
            return
        params = code[2:-1]
        if params in ("", "0"):
            self._codes.clear()
        else:
            self._codes.append(code)

    @property
    def active(self) -> str:
        return "".join(self._codes)

    def line_end_reset(self) -> str:
        return RESET if self._codes else ""


# ---------------------------------------------------------------------------
# wrap_text_with_ansi
# ---------------------------------------------------------------------------


def wrap_text_with_ansi(text: str, width: int) -> list[str]:
    """Word-wrap *text* to *width* columns, preserving ANSI escape codes.

    Embedded newlines start a new physical line. Words longer than *width*
    are broken at the column limit. Lines are not padded.
    """
    if width <= 0:
        return text.split("\n")

    state = SgrState()
    result: list[str] = []
    for physical_line in text.split("\n"):
        result.extend(_wrap_single_line(physical_line, width, state))
    return result


def _wrap_single_line(line: str, width: int, state: SgrState) -> list[str]:
    if not line:
        return [""]

    lines: list[str] = []
    current: list[str] = [state.active]
    current_width = 0
    # index into ``current`` and width just after the last space
    break_at: tuple[int, int] | None = None

    i = 0
    while i < len(line):
        extracted = extract_ansi_code(line, i)
        if extracted is not None:
            code, length = extracted
            state.process(code)
            current.append(code)
            i += length
            continue

        ch = "   " if line[i] == "\t" else line[i]
        ch_width = 3 if line[i] == "\t" else _grapheme_width(ch)

        if current_width + ch_width > width and current_width > 0:
            if break_at is not None and ch != " ":
                idx, before_width = break_at
                head, tail = current[:idx], current[idx:]
                lines.append("".join(head).rstrip(" ") + state.line_end_reset())
                current = [state.active, *tail]
                current_width -= before_width
            else:
                lines.append("".join(current) + state.line_end_reset())
                current = [state.active]
                current_width = 0
            break_at = None
            if ch == " ":
                i += 1
                continue

        current.append(ch)
        current_width += ch_width
        if ch == " ":
            break_at = (len(current), current_width)
        i += 1

    lines.append("".join(current) + state.line_end_reset())
    return lines


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width* it is cut and *ellipsis* is
    appended (the ellipsis counts towards the width).
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return _take_columns(ellipsis, max_width)
    return _take_columns(text, target) + RESET + ellipsis


def _take_columns(text: str, max_cols: int) -> str:
    """Return the prefix of *text* that fits within *max_cols* columns."""
    result: list[str] = []
    cols = 0
    i = 0
    while i < len(text):
        extracted = extract_ansi_code(text, i)
        if extracted is not None:
            code, length = extracted
            result.append(code)
            i += length
            continue
        w = _grapheme_width(text[i])
        if cols + w > max_cols:
            break
        result.append(text[i])
        cols += w
        i += 1
    return "".join(result)


# ---------------------------------------------------------------------------
# terminal_size
# ---------------------------------------------------------------------------


def terminal_size() -> tuple[int, int]:
    """Return ``(columns, rows)`` of the controlling terminal (80x24 fallback)."""
    try:
        size = os.get_terminal_size(sys.stdout.fileno())
    except (ValueError, OSError):
        return 80, 24
    return size.columns, size.lines
