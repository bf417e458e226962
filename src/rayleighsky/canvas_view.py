"""Streamlit side of the sky canvas: surface measurement and frame display.

The render surface is the main block container the frame is shown in. Its
content width is measured in the browser through streamlit-js-eval, and a
ResizeObserver re-reports it whenever the container changes size, so every
resize reaches SkyState as exactly one rerun.
"""

import math
from typing import Any, Protocol

from rayleighsky.i18n import t
from rayleighsky.renderers.sky_canvas import sky_frame_png
from rayleighsky.state import SkyState

WIDE_BREAKPOINT = 768  # Viewport width (CSS px) where the taller canvas kicks in
WIDE_HEIGHT = 384.0
NARROW_HEIGHT = 256.0

# Used until the browser answers: the centered layout column on a desktop
DEFAULT_SURFACE = (704.0, 1024.0, 1.0)

# Evaluated once inside the streamlit-js-eval iframe (same origin as the app).
# Returns [content width, viewport width, devicePixelRatio] and installs an
# observer that pushes a new triple with sendDataToPython on each change,
# at most once per animation frame.
MEASURE_SURFACE_JS = """
(function () {
  var p = window.parent;
  var box = p.document.querySelector('[data-testid="stMainBlockContainer"]') || p.document.body;
  function measure() {
    var cs = p.getComputedStyle(box);
    var w = box.clientWidth - parseFloat(cs.paddingLeft) - parseFloat(cs.paddingRight);
    return [Math.floor(w), p.innerWidth, p.devicePixelRatio || 1];
  }
  var last = JSON.stringify(measure());
  var queued = false;
  new p.ResizeObserver(function () {
    if (queued) return;
    queued = true;
    p.requestAnimationFrame(function () {
      queued = false;
      var now = measure();
      if (JSON.stringify(now) === last) return;
      last = JSON.stringify(now);
      sendDataToPython({value: now, dataType: "json"});
    });
  }).observe(box);
  return measure();
})()
"""


class ImageTarget(Protocol):
    def image(self, image: bytes, **kwargs: Any) -> Any: ...


def parse_surface(value: Any) -> tuple[float, float, float] | None:
    """Validate the [content width, viewport width, pixel ratio] triple from the browser.

    Returns None for anything else (including None before the browser answers).
    """
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return None
    try:
        container, viewport, ratio = (float(v) for v in value)
    except (TypeError, ValueError):
        return None
    return container, viewport, (ratio if ratio > 0 else 1.0)


def surface_size(container_width: float, viewport_width: float) -> tuple[float, float]:
    """Logical canvas size: the container's content width, height by breakpoint."""
    width = max(0.0, float(math.floor(container_width)))
    height = WIDE_HEIGHT if viewport_width >= WIDE_BREAKPOINT else NARROW_HEIGHT
    return width, height


def apply_surface(sky: SkyState, value: Any) -> bool:
    """Feed a browser measurement into the state holder.

    Returns True if the surface changed (and a redraw was requested).
    """
    container, viewport, ratio = parse_surface(value) or DEFAULT_SURFACE
    width, height = surface_size(container, viewport)
    return sky.set_viewport(width, height, ratio)


def show_sky_frame(target: ImageTarget, sky: SkyState, lang: str) -> bytes | None:
    """Run this script run's paint opportunity and show the frame.

    The draw callback reads the holder at paint time; when nothing changed
    the cached frame is reused. The frame is displayed at exactly its logical
    width so 1 logical px is 1 CSS px; the PNG itself carries width·ratio pixels.

    Args:
        target: st or a container with an image() method.
        sky: Shared state holder.
        lang: UI language for the canvas labels.

    Returns:
        PNG bytes shown, or None for a zero-sized surface.
    """
    frame = sky.scheduler.paint(
        lambda: sky_frame_png(
            sky.snapshot(),
            *sky.viewport,
            atmosphere_label=t("canvas_atmosphere", lang),
            observer_label=t("canvas_observer", lang),
        )
    )
    if frame is not None:
        width, _, _ = sky.viewport
        target.image(frame, width=int(width))
    return frame
