"""Exception types raised by the layout algebra and the live runtime."""

from __future__ import annotations


class MosaicError(Exception):
    """Base class for every error raised by ``mosaic.tui``."""


class ConstructionError(MosaicError):
    """An App or Compositor was built from inconsistent parts.

    Raised for mismatched region/widget names, duplicate region names, and
    widgets that do not fit their region.
    """


class PaddingTooSmall(MosaicError, ValueError):
    """A padding target is smaller than the content it should hold."""

    def __init__(self, target: int, actual: int, axis: str = "width") -> None:
        self.target = target
        self.actual = actual
        self.axis = axis
        super().__init__(
            f"cannot pad content of {axis} {actual} to a target {axis} of {target}"
        )


class RawModeUnavailable(MosaicError):
    """The terminal could not be switched into raw (cbreak) mode."""


class TerminalWriteFailure(MosaicError, OSError):
    """Writing to or flushing the terminal output stream failed."""
