"""Single authoritative holder for the sun angle and render surface size."""

import logging

from rayleighsky.models import SkySnapshot
from rayleighsky.physics import observe
from rayleighsky.scheduler import FrameScheduler

logger = logging.getLogger(__name__)

DEFAULT_SUN_ANGLE = 45.0


class SkyState:
    """Owns the mutable slots (angle, viewport) and hands out immutable snapshots.

    Every change that affects the frame enqueues a redraw on the shared
    scheduler instead of drawing directly.
    """

    def __init__(
        self,
        sun_angle: float = DEFAULT_SUN_ANGLE,
        width: float = 0.0,
        height: float = 0.0,
        pixel_ratio: float = 1.0,
    ) -> None:
        self._sun_angle = sun_angle
        self._width = width
        self._height = height
        self._pixel_ratio = pixel_ratio
        self.scheduler: FrameScheduler[bytes] = FrameScheduler()

    @property
    def sun_angle(self) -> float:
        return self._sun_angle

    @property
    def viewport(self) -> tuple[float, float, float]:
        """(width, height, pixel_ratio) of the render surface in logical pixels."""
        return self._width, self._height, self._pixel_ratio

    def set_sun_angle(self, angle: float) -> bool:
        """Store a new angle. Returns True if it changed (and a redraw was requested)."""
        if angle == self._sun_angle:
            return False
        self._sun_angle = angle
        self.scheduler.request_redraw()
        return True

    def set_viewport(self, width: float, height: float, pixel_ratio: float = 1.0) -> bool:
        """Store a new surface size. Returns True if it changed (and a redraw was requested)."""
        new = (width, height, pixel_ratio)
        if new == self.viewport:
            return False
        logger.debug("viewport %s -> %s", self.viewport, new)
        self._width, self._height, self._pixel_ratio = new
        self.scheduler.request_redraw()
        return True

    def snapshot(self) -> SkySnapshot:
        return observe(self._sun_angle)
