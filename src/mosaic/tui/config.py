"""Runtime settings for live displays."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _default_write_log() -> str:
    return os.environ.get("MOSAIC_TUI_WRITE_LOG", "")


@dataclass
class LiveConfig:
    """Settings shared by every live display.

    Attributes
    ----------
    refresh_interval:
        Minimum number of seconds between two redraws.
    poll_interval:
        Sleep between two ``update`` calls in :meth:`LiveDisplay.play`.
    hide_cursor:
        Hide the cursor while the display runs (only when raw mode is on).
    transient:
        Erase the display from the screen when it stops.
    write_log_path:
        When non-empty, every terminal write is appended to this file.
    """

    refresh_interval: float = 0.1
    poll_interval: float = 0.01
    hide_cursor: bool = True
    transient: bool = False
    write_log_path: str = field(default_factory=_default_write_log)

    @classmethod
    def from_env(cls) -> LiveConfig:
        """Build a config, honouring ``MOSAIC_TUI_REFRESH_MS``."""
        config = cls()
        refresh_ms = os.environ.get("MOSAIC_TUI_REFRESH_MS")
        if refresh_ms:
            try:
                config.refresh_interval = max(0.0, float(refresh_ms) / 1000.0)
            except ValueError:
                raise ValueError(
                    f"MOSAIC_TUI_REFRESH_MS must be a number, got {refresh_ms!r}"
                ) from None
        return config
