"""
Angle folding, path length, intensity table and sky colors.

Covers the closed-form properties plus the sunrise/noon/sunset scenarios.
"""

import math

import numpy as np
import pytest

from rayleighsky import physics
from rayleighsky.models import Phase

ANGLES = np.arange(0.0, 180.5, 0.5)
CEILING = 1.0 / math.sin(math.radians(5.0))


def test_effective_angle_is_symmetric() -> None:
    for a in ANGLES:
        assert physics.effective_angle(a) == pytest.approx(physics.effective_angle(180 - a))
        assert 0.0 <= physics.effective_angle(a) <= 90.0


def test_clamped_angle_floor() -> None:
    assert physics.clamped_angle(0) == 5.0
    assert physics.clamped_angle(2.5) == 5.0
    assert physics.clamped_angle(180) == 5.0
    assert physics.clamped_angle(30) == 30.0
    assert physics.clamped_angle(150) == 30.0


def test_path_length_bounds() -> None:
    for a in ANGLES:
        factor = physics.path_length_factor(a)
        assert factor >= 1.0
        assert factor <= CEILING + 1e-12
    assert physics.path_length_factor(90) == 1.0


def test_path_length_decreases_with_elevation() -> None:
    elevations = np.linspace(5.0, 90.0, 171)
    factors = [physics.path_length_factor(e) for e in elevations]
    assert all(b <= a for a, b in zip(factors, factors[1:]))


def test_phase_label_boundaries() -> None:
    assert physics.phase_label(0) == Phase.SUNRISE
    assert physics.phase_label(19.5) == Phase.SUNRISE
    assert physics.phase_label(20) == Phase.MORNING
    assert physics.phase_label(69.5) == Phase.MORNING
    assert physics.phase_label(70) == Phase.MIDDAY
    assert physics.phase_label(109.5) == Phase.MIDDAY
    assert physics.phase_label(110) == Phase.AFTERNOON
    assert physics.phase_label(159.5) == Phase.AFTERNOON
    assert physics.phase_label(160) == Phase.SUNSET
    assert physics.phase_label(180) == Phase.SUNSET


def test_out_of_range_angles_do_not_crash() -> None:
    for a in (-45.0, -0.5, 180.5, 270.0, 1e6):
        snap = physics.observe(a)
        assert math.isfinite(snap.path_length)
        assert 1.0 <= snap.path_length <= CEILING + 1e-12
        assert 0.0 <= snap.sunset_factor <= 1.0


def test_intensity_table() -> None:
    bands = physics.WAVELENGTH_BANDS
    assert [b.name for b in bands] == ["Blue", "Green", "Red"]
    assert [b.wavelength for b in bands] == [450.0, 550.0, 650.0]
    blue, green, red = (b.intensity for b in bands)
    assert blue == 100.0
    assert red < green < blue
    assert blue / red == pytest.approx((650 / 450) ** 4)
    assert blue / red == pytest.approx(4.35, abs=0.01)


def test_intensity_table_is_angle_independent() -> None:
    assert physics.scattering_intensities() == physics.WAVELENGTH_BANDS


def test_intensity_normalizes_to_shortest_band() -> None:
    bands = physics.scattering_intensities(
        (("Red", 700.0, "#f00"), ("Violet", 400.0, "#80f"))
    )
    assert [b.name for b in bands] == ["Red", "Violet"]
    assert bands[1].intensity == 100.0
    assert bands[0].intensity == pytest.approx(100.0 * (400 / 700) ** 4)


def test_sunset_factor_endpoints_and_monotonic() -> None:
    assert physics.sunset_factor(90) == 0.0
    assert physics.sunset_factor(0) == 1.0
    assert physics.sunset_factor(180) == 1.0
    distances = np.linspace(0.0, 90.0, 91)
    values = [physics.sunset_factor(90 + d) for d in distances]
    assert all(b >= a for a, b in zip(values, values[1:]))
    # Negligible until well past mid-morning
    assert physics.sunset_factor(45) < 0.15


def test_sky_colors_endpoints() -> None:
    noon = physics.sky_colors(90)
    assert noon.top == (135, 206, 235)
    assert noon.horizon == (200, 230, 255)

    dusk = physics.sky_colors(0)
    # Floored channels: 135·0.2, 206·0.2 = 41.2, 235·0.4
    assert dusk.top == (27, 41, 94)
    assert all(isinstance(c, int) for c in dusk.top)
    assert dusk.horizon == (255, 100, 50)
    assert physics.sky_colors(180) == dusk


def test_sun_color_step() -> None:
    assert physics.sun_color(90) == physics.SUN_COLOR_DAY
    assert physics.sun_color(20) == physics.SUN_COLOR_DAY
    assert physics.sun_color(160) == physics.SUN_COLOR_DAY
    assert physics.sun_color(19.5) == physics.SUN_COLOR_DUSK
    assert physics.sun_color(160.5) == physics.SUN_COLOR_DUSK


def test_sun_position_on_arc() -> None:
    x, y = physics.sun_position(0, 100, 200, 50)
    assert (x, y) == pytest.approx((50, 200))
    x, y = physics.sun_position(90, 100, 200, 50)
    assert (x, y) == pytest.approx((100, 150))
    x, y = physics.sun_position(180, 100, 200, 50)
    assert (x, y) == pytest.approx((150, 200))


def test_scenario_noon() -> None:
    snap = physics.observe(90)
    assert snap.phase == Phase.MIDDAY
    assert f"{snap.path_length:.2f}" == "1.00"
    assert snap.sunset_factor == 0.0
    assert snap.sun_color == physics.SUN_COLOR_DAY


def test_scenario_sunrise_and_sunset_mirror() -> None:
    rise = physics.observe(5)
    assert rise.effective_angle == 5
    assert rise.clamped_angle == 5
    assert rise.path_length == pytest.approx(CEILING)
    assert rise.path_length == pytest.approx(11.47, abs=0.01)
    assert rise.phase == Phase.SUNRISE

    sset = physics.observe(175)
    assert sset.effective_angle == 5
    assert sset.path_length == pytest.approx(rise.path_length)
    assert sset.phase == Phase.SUNSET


@pytest.mark.parametrize("angle", [0.0, 180.0])
def test_full_dusk_top_has_no_float_rounding_loss(angle) -> None:
    # 135·(1 - 0.8) evaluates to 26.999... and would floor to 26
    assert physics.sky_colors(angle).top[0] == 27
