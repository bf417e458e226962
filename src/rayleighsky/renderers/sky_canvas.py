"""Matplotlib raster sky renderer.

Draws one frame of the scattering scene (sky gradient, light rays, sun with
glow, ground, atmosphere guide, observer) onto an Agg canvas.

Coordinate system:
  x ∈ [0, width]   logical pixels, left to right
  y ∈ [0, height]  logical pixels, top to bottom (canvas convention)

The backing pixel buffer is width·ratio × height·ratio: the device pixel ratio
only enters through the figure dpi, never through the geometry.
"""

import io
import math

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from rayleighsky.models import SkyGeometry, SkySnapshot
from rayleighsky.physics import sun_position

_BASE_DPI = 100  # Logical pixels per inch at pixel ratio 1
_PT_PER_PX = 72 / _BASE_DPI

_HORIZON_FRACTION = 0.9
_ORBIT_WIDTH_FRACTION = 0.45
_ORBIT_HEIGHT_FRACTION = 0.75
_ATMOSPHERE_OFFSET = 25.0
_LABEL_MIN_Y = 15.0
_RAY_HORIZON_TOLERANCE = 10.0

_SUN_RADIUS = 20.0
_GLOW_LAYERS = 12

_RAY_COUNT = 12
_RAY_STEPS = 24  # Sub-segments per ray for the fade gradient
_RAY_START_RGBA = (1.0, 1.0, 200 / 255, 0.8)
_RAY_END_RGBA = (1.0, 1.0, 1.0, 0.0)

_GROUND_COLOR = "#0f172a"
_GUIDE_RGBA = (1.0, 1.0, 1.0, 0.15)
_GUIDE_LABEL_COLOR = "#94a3b8"
_OBSERVER_COLOR = "#cbd5e1"


def _pt(px: float) -> float:
    """Logical pixels → points, for line widths and font sizes."""
    return px * _PT_PER_PX


def sky_geometry(angle: float, width: float, height: float) -> SkyGeometry | None:
    """Lay out the scene for a surface of the given logical size.

    The orbit radius is fitted to both dimensions so the whole arc stays
    visible for any aspect ratio.

    Args:
        angle: Sun angle in degrees.
        width: Surface width in logical pixels.
        height: Surface height in logical pixels.

    Returns:
        SkyGeometry, or None for a zero-sized surface.
    """
    if width <= 0 or height <= 0:
        return None

    cx = width / 2
    cy = height * _HORIZON_FRACTION
    orbit_radius = min(width * _ORBIT_WIDTH_FRACTION, height * _ORBIT_HEIGHT_FRACTION)
    sun_x, sun_y = sun_position(angle, cx, cy, orbit_radius)
    atmosphere_radius = orbit_radius + _ATMOSPHERE_OFFSET

    return SkyGeometry(
        width=width,
        height=height,
        cx=cx,
        cy=cy,
        orbit_radius=orbit_radius,
        sun_x=sun_x,
        sun_y=sun_y,
        atmosphere_radius=atmosphere_radius,
        label_y=max(_LABEL_MIN_Y, cy - atmosphere_radius - 8),
        rays_visible=sun_y <= cy + _RAY_HORIZON_TOLERANCE,
    )


def ray_bundle_alpha(sunset_factor: float) -> float:
    """Overall ray opacity: crisp at noon, fainter toward dusk."""
    return 0.2 + 0.2 * (1 - sunset_factor)


def glow_extent(sunset_factor: float) -> float:
    """Halo reach beyond the sun disk, larger and softer near the horizon."""
    return 20 + 20 * sunset_factor


def _ray_segments(geo: SkyGeometry, bundle_alpha: float) -> LineCollection:
    """12 rays fanning from the sun to the ground, each fading to transparent."""
    start = np.array(_RAY_START_RGBA)
    end = np.array(_RAY_END_RGBA)
    t = np.linspace(0.0, 1.0, _RAY_STEPS + 1)
    mid_t = (t[:-1] + t[1:]) / 2

    segments: list[np.ndarray] = []
    colors: list[np.ndarray] = []
    for i in range(_RAY_COUNT):
        spread = (i - _RAY_COUNT / 2) * 0.1
        end_x = geo.cx + spread * geo.width * 1.5
        xs = geo.sun_x + (end_x - geo.sun_x) * t
        ys = geo.sun_y + (geo.cy - geo.sun_y) * t
        points = np.column_stack([xs, ys])
        segments.extend(np.stack([points[:-1], points[1:]], axis=1))
        rgba = start + (end - start) * mid_t[:, None]
        rgba[:, 3] *= bundle_alpha
        colors.extend(rgba)

    return LineCollection(
        segments, colors=colors, linewidths=_pt(2), capstyle="butt", zorder=2
    )


def render_sky_frame(
    snapshot: SkySnapshot,
    width: float,
    height: float,
    pixel_ratio: float = 1.0,
    atmosphere_label: str = "Atmosphere Top",
    observer_label: str = "Observer",
) -> Figure | None:
    """Render one complete frame as a matplotlib Figure.

    Args:
        snapshot: Angle-derived state to draw.
        width: Surface width in logical pixels.
        height: Surface height in logical pixels.
        pixel_ratio: Device pixel ratio; scales the backing buffer only.
        atmosphere_label: Text above the dashed atmosphere guide.
        observer_label: Text under the observer marker.

    Returns:
        Figure backed by an Agg canvas, or None when the surface has no extent.
    """
    geo = sky_geometry(snapshot.sun_angle, width, height)
    if geo is None or pixel_ratio <= 0:
        return None

    fig = Figure(
        figsize=(width / _BASE_DPI, height / _BASE_DPI), dpi=_BASE_DPI * pixel_ratio
    )
    FigureCanvasAgg(fig)
    fig.patch.set_facecolor(_GROUND_COLOR)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.axis("off")

    # Sky gradient over the whole surface; the ground covers the lower band
    top = np.array(snapshot.colors.top, dtype=float) / 255
    horizon = np.array(snapshot.colors.horizon, dtype=float) / 255
    gradient = np.linspace(top, horizon, 256)[:, None, :]
    ax.imshow(
        gradient,
        extent=(0, width, height, 0),
        aspect="auto",
        interpolation="bilinear",
        zorder=0,
    )

    if geo.rays_visible:
        ax.add_collection(_ray_segments(geo, ray_bundle_alpha(snapshot.sunset_factor)))

    # Glow: stacked translucent rings approximating a blurred shadow
    reach = glow_extent(snapshot.sunset_factor)
    for k in range(_GLOW_LAYERS, 0, -1):
        ax.add_patch(
            Circle(
                (geo.sun_x, geo.sun_y),
                _SUN_RADIUS + reach * k / _GLOW_LAYERS,
                facecolor=snapshot.sun_color,
                edgecolor="none",
                alpha=0.5 / _GLOW_LAYERS,
                zorder=3,
            )
        )
    ax.add_patch(
        Circle(
            (geo.sun_x, geo.sun_y),
            _SUN_RADIUS,
            facecolor=snapshot.sun_color,
            edgecolor="none",
            zorder=4,
        )
    )

    ax.add_patch(
        Rectangle(
            (0, geo.cy),
            width,
            height - geo.cy,
            facecolor=_GROUND_COLOR,
            edgecolor="none",
            zorder=5,
        )
    )

    # Upper half of the guide circle; screen y grows downward so θ ∈ [π, 2π]
    theta = np.linspace(math.pi, 2 * math.pi, 181)
    ax.plot(
        geo.cx + geo.atmosphere_radius * np.cos(theta),
        geo.cy + geo.atmosphere_radius * np.sin(theta),
        color=_GUIDE_RGBA,
        linewidth=_pt(1),
        linestyle=(0, (6, 6)),  # Dash lengths scale with the 1 px line width
        zorder=6,
    )
    ax.text(
        geo.cx,
        geo.label_y,
        atmosphere_label,
        color=_GUIDE_LABEL_COLOR,
        fontsize=_pt(10),
        ha="center",
        va="baseline",
        zorder=7,
    )

    ax.add_patch(
        Circle((geo.cx, geo.cy), 4, facecolor=_OBSERVER_COLOR, edgecolor="none", zorder=7)
    )
    ax.text(
        geo.cx,
        geo.cy + 12,
        observer_label,
        color=_OBSERVER_COLOR,
        fontsize=_pt(10),
        ha="center",
        va="center",
        zorder=7,
    )

    return fig


def rasterize_sky_frame(
    snapshot: SkySnapshot,
    width: float,
    height: float,
    pixel_ratio: float = 1.0,
) -> np.ndarray | None:
    """Render and return the backing RGBA buffer (rows × cols × 4, uint8)."""
    fig = render_sky_frame(snapshot, width, height, pixel_ratio)
    if fig is None:
        return None
    canvas = fig.canvas
    canvas.draw()
    return np.asarray(canvas.buffer_rgba()).copy()  # type: ignore[attr-defined]


def sky_frame_png(
    snapshot: SkySnapshot,
    width: float,
    height: float,
    pixel_ratio: float = 1.0,
    atmosphere_label: str = "Atmosphere Top",
    observer_label: str = "Observer",
) -> bytes | None:
    """Render one frame and encode it as PNG bytes for st.image().

    Returns:
        PNG bytes, or None when the surface has no extent.
    """
    fig = render_sky_frame(
        snapshot,
        width,
        height,
        pixel_ratio,
        atmosphere_label=atmosphere_label,
        observer_label=observer_label,
    )
    if fig is None:
        return None
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=fig.dpi, facecolor=fig.get_facecolor())
    return buf.getvalue()
