"""Redraw coalescing: a dirty flag plus a paint-time draw callback."""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FrameScheduler(Generic[T]):
    """Turns any number of redraw requests into at most one frame per paint.

    Event handlers (angle change, viewport resize) only call request_redraw().
    The frame is produced later by paint(), which invokes the draw callback
    if a request is pending and otherwise hands back the last frame. The
    callback is supplied at paint time so it reads current state, never the
    state captured when the request was made.
    """

    def __init__(self) -> None:
        self._dirty = True  # First paint always draws
        self._frame: T | None = None
        self.frames_drawn = 0

    @property
    def pending(self) -> bool:
        return self._dirty

    def request_redraw(self) -> None:
        self._dirty = True

    def paint(self, draw: Callable[[], T | None]) -> T | None:
        """Run one paint opportunity.

        Args:
            draw: Produces a frame from current state. May return None
                (e.g. zero-sized surface); the request is still consumed and
                the next trigger retries.

        Returns:
            The freshly drawn frame, or the cached one when nothing was pending.
        """
        if not self._dirty:
            return self._frame
        self._dirty = False
        self._frame = draw()
        self.frames_drawn += 1
        logger.debug("frame %d drawn", self.frames_drawn)
        return self._frame
