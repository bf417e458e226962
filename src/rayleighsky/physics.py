"""Scattering physics layer: angle folding, path length, 1/λ⁴ intensities, and sky colors."""

import math

from rayleighsky.models import RGB, Phase, SkyColorPair, SkySnapshot, WavelengthBand

# Floor for the folded elevation. Caps the path-length factor at 1/sin(5°) ≈ 11.47;
# a display bound, not a physical horizon limit.
MIN_ELEVATION_DEG = 5.0

# (name, wavelength nm, display color), in display order
_BANDS: tuple[tuple[str, float, str], ...] = (
    ("Blue", 450.0, "#3b82f6"),
    ("Green", 550.0, "#22c55e"),
    ("Red", 650.0, "#ef4444"),
)

# Sky-top endpoint at noon and the per-channel dimming applied at full sunset factor
_NOON_TOP: RGB = (135, 206, 235)
_TOP_DIMMING: tuple[float, float, float] = (0.8, 0.8, 0.6)
_NOON_HORIZON: RGB = (200, 230, 255)
_DUSK_HORIZON: RGB = (255, 100, 50)

SUN_COLOR_DAY = "#ffffdd"
SUN_COLOR_DUSK = "#ff5500"
_SUN_DUSK_THRESHOLD_DEG = 70.0


def effective_angle(angle: float) -> float:
    """Fold the 0–180° sweep so morning and afternoon mirror each other."""
    return 180.0 - angle if angle > 90 else angle


def clamped_angle(angle: float) -> float:
    return max(effective_angle(angle), MIN_ELEVATION_DEG)


def path_length_factor(angle: float) -> float:
    """Relative atmosphere thickness traversed, 1.0 for the zenith path.

    Approximated as 1/sin(elevation) with the elevation floored at
    MIN_ELEVATION_DEG so the factor stays finite near the horizon.
    """
    return 1.0 / math.sin(math.radians(clamped_angle(angle)))


def phase_label(angle: float) -> str:
    """Label the raw angle. Morning and Afternoon stay distinct despite symmetric physics."""
    if angle < 20:
        return Phase.SUNRISE
    if angle < 70:
        return Phase.MORNING
    if angle < 110:
        return Phase.MIDDAY
    if angle < 160:
        return Phase.AFTERNOON
    return Phase.SUNSET


def scattering_intensities(
    bands: tuple[tuple[str, float, str], ...] = _BANDS,
) -> tuple[WavelengthBand, ...]:
    """Relative Rayleigh scattering intensity per band (I ∝ 1/λ⁴).

    Args:
        bands: (name, wavelength nm, color) triples in display order.

    Returns:
        WavelengthBand tuple in the same order, normalized so the shortest
        wavelength equals 100.
    """
    shortest = min(wavelength for _, wavelength, _ in bands)
    reference = 1.0 / shortest**4
    return tuple(
        WavelengthBand(
            name=name,
            wavelength=wavelength,
            intensity=(1.0 / wavelength**4) / reference * 100.0,
            color=color,
        )
        for name, wavelength, color in bands
    )


# Angle-independent: computed once, shared by every caller
WAVELENGTH_BANDS: tuple[WavelengthBand, ...] = scattering_intensities()


def sunset_factor(angle: float) -> float:
    """Cubic dusk easing: ~0 for most of the day, rising sharply near the horizons."""
    return min(1.0, (abs(angle - 90) / 90) ** 3)


def _lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def sky_colors(angle: float) -> SkyColorPair:
    """Interpolated sky-top and horizon colors for the given angle."""
    f = sunset_factor(angle)
    # Subtract, don't scale by (1 - dim·f): 135·(1 - 0.8) is 26.999...
    top = tuple(
        math.floor(channel - channel * dim * f)
        for channel, dim in zip(_NOON_TOP, _TOP_DIMMING)
    )
    horizon = tuple(
        math.floor(_lerp(noon, dusk, f))
        for noon, dusk in zip(_NOON_HORIZON, _DUSK_HORIZON)
    )
    return SkyColorPair(top=top, horizon=horizon)  # type: ignore[arg-type]


def sun_color(angle: float) -> str:
    """Step switch, no interpolation; the color snaps at 20° and 160°."""
    if abs(angle - 90) <= _SUN_DUSK_THRESHOLD_DEG:
        return SUN_COLOR_DAY
    return SUN_COLOR_DUSK


def sun_position(
    angle: float, cx: float, cy: float, radius: float
) -> tuple[float, float]:
    """Sun centre on the orbit arc around (cx, cy). Screen y grows downward.

    Args:
        angle: Sun angle in degrees (0 = left horizon, 180 = right horizon).
        cx: Observer x.
        cy: Observer y (horizon line).
        radius: Orbit radius.

    Returns:
        (x, y) in the same units as the inputs.
    """
    theta = math.pi - math.radians(angle)
    return cx + radius * math.cos(theta), cy - radius * math.sin(theta)


def observe(angle: float) -> SkySnapshot:
    """Top-level entry point: derive every angle-dependent value at once.

    Args:
        angle: Sun angle in degrees.

    Returns:
        Immutable SkySnapshot consumed by the renderer, chart panel and explanation client.
    """
    return SkySnapshot(
        sun_angle=angle,
        effective_angle=effective_angle(angle),
        clamped_angle=clamped_angle(angle),
        path_length=path_length_factor(angle),
        phase=phase_label(angle),
        sunset_factor=sunset_factor(angle),
        colors=sky_colors(angle),
        sun_color=sun_color(angle),
    )
