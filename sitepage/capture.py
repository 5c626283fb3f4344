"""Redirect printed page output into memory so it can be wrapped in a layout.

:class:`OutputCapture` swaps ``sys.stdout`` for an in-memory buffer between
``start()`` and ``end()``. Captures nest: each ``end()`` closes the most recent
``start()`` and restores whatever stream was active before it.

Examples
--------
>>> capture = OutputCapture()
>>> capture.start()
>>> print("hello")
>>> capture.end()
'hello\\n'
"""

from __future__ import annotations

import contextlib
import io
import logging

logger = logging.getLogger(__name__)


class CaptureError(RuntimeError):
    """Raised when capture is stopped without having been started."""


class OutputCapture:
    """Stack of ``sys.stdout`` redirections backed by ``io.StringIO`` buffers."""

    def __init__(self) -> None:
        self._frames: list[tuple[io.StringIO, contextlib.ExitStack]] = []

    @property
    def active(self) -> bool:
        """Return True while at least one capture is running."""
        return bool(self._frames)

    @property
    def depth(self) -> int:
        """Return the number of nested captures currently running."""
        return len(self._frames)

    def start(self) -> None:
        """Begin capturing everything written to ``sys.stdout``."""
        stack = contextlib.ExitStack()
        buffer = stack.enter_context(io.StringIO())
        stack.enter_context(contextlib.redirect_stdout(buffer))
        self._frames.append((buffer, stack))
        logger.debug("Started output capture (depth %d)", len(self._frames))

    def end(self) -> str:
        """Stop the most recent capture and return the text it collected.

        Raises
        ------
        CaptureError
            If no capture is running.
        """
        if not self._frames:
            msg = "Output capture was ended before it was started."
            raise CaptureError(msg)
        buffer, stack = self._frames.pop()
        content = buffer.getvalue()
        stack.close()
        logger.debug(
            "Ended output capture (%d characters, depth %d)",
            len(content),
            len(self._frames),
        )
        return content


__all__ = ["CaptureError", "OutputCapture"]
