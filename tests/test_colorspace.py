import pytest

from photoframe.config import PALETTE_MEASURED, PALETTE_THEORETICAL
from photoframe.processing.colorspace import (
    delta_e,
    lab_to_rgb,
    linear_to_srgb,
    rgb_to_lab,
    rgb_to_xyz,
    srgb_to_linear,
)


def test_srgb_to_linear_uses_piecewise_curve():
    assert srgb_to_linear(0) == 0.0
    assert srgb_to_linear(255) == pytest.approx(1.0)
    # 10/255 sits below the 0.04045 threshold and stays on the linear segment
    assert srgb_to_linear(10) == pytest.approx((10 / 255.0) / 12.92)


def test_linear_to_srgb_clamps_out_of_gamut_values():
    assert linear_to_srgb(-0.2) == 0
    assert linear_to_srgb(1.5) == 255


def test_white_maps_to_reference_white():
    x, y, z = rgb_to_xyz(255, 255, 255)
    assert (x, y, z) == pytest.approx((95.047, 100.0, 108.883), abs=0.01)

    lightness, a, b = rgb_to_lab(255, 255, 255)
    assert lightness == pytest.approx(100.0, abs=0.01)
    assert a == pytest.approx(0.0, abs=0.05)
    assert b == pytest.approx(0.0, abs=0.05)


def test_black_maps_to_origin():
    assert rgb_to_lab(0, 0, 0) == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)


@pytest.mark.parametrize("color", sorted(set(PALETTE_MEASURED + PALETTE_THEORETICAL)))
def test_palette_colors_survive_lab_round_trip(color):
    recovered = lab_to_rgb(*rgb_to_lab(*color))
    for original, channel in zip(color, recovered):
        assert abs(original - channel) <= 1


def test_delta_e_is_euclidean():
    assert delta_e((50.0, 0.0, 0.0), (53.0, 4.0, 0.0)) == pytest.approx(5.0)
    assert delta_e((10.0, 20.0, 30.0), (10.0, 20.0, 30.0)) == 0.0
