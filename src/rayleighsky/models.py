"""Data model definitions: explicit boundaries between input, physics, and render layers."""

from dataclasses import dataclass

RGB = tuple[int, int, int]


class Phase:
    """Phase-of-day labels for the raw (unfolded) sun angle."""

    SUNRISE = "Sunrise"
    MORNING = "Morning"
    MIDDAY = "Midday"
    AFTERNOON = "Afternoon"
    SUNSET = "Sunset"


@dataclass(frozen=True)
class WavelengthBand:
    """One bar of the scattering chart."""

    name: str  # "Blue", "Green", "Red"
    wavelength: float  # Wavelength (nm)
    intensity: float  # Relative scattering intensity, shortest band = 100
    color: str  # Display color (hex)


@dataclass(frozen=True)
class SkyColorPair:
    """Gradient endpoints for the sky fill."""

    top: RGB
    horizon: RGB


@dataclass(frozen=True)
class SkySnapshot:
    """Everything derived from one sun angle. The sole input to renderers."""

    sun_angle: float  # Raw slider value (degrees, 0=sunrise, 90=noon, 180=sunset)
    effective_angle: float  # Angular distance from the nearest horizon
    clamped_angle: float  # effective_angle floored at 5°
    path_length: float  # Relative atmosphere thickness vs. the zenith path
    phase: str  # One of the Phase labels
    sunset_factor: float  # Cubic dusk easing in [0, 1]
    colors: SkyColorPair
    sun_color: str  # Sun disk color (hex)


@dataclass(frozen=True)
class SkyGeometry:
    """Frame layout in logical (unscaled) pixels. Canvas y grows downward."""

    width: float
    height: float
    cx: float  # Observer x (horizontal centre)
    cy: float  # Observer y (horizon line)
    orbit_radius: float
    sun_x: float
    sun_y: float
    atmosphere_radius: float  # Dashed guide arc radius
    label_y: float  # "Atmosphere Top" baseline, clamped inside the surface
    rays_visible: bool  # Sun above (or within tolerance of) the horizon


@dataclass(frozen=True)
class ExplanationResult:
    """Explanation prose plus the state it was requested for."""

    sun_angle: float
    path_length: float
    text: str

    def matches(self, snapshot: SkySnapshot) -> bool:
        """True while the snapshot still describes the state this prose explains."""
        return (
            self.sun_angle == snapshot.sun_angle
            and self.path_length == snapshot.path_length
        )
