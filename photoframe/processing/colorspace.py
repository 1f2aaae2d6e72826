"""sRGB, linear light, CIE XYZ and CIE L*a*b* conversions.

XYZ values are scaled to 0..100 and L*a*b* is computed against the
D65 reference white (95.047, 100.0, 108.883).
"""

from __future__ import annotations

import math
from typing import Tuple

from .buffer import clamp_byte

Triple = Tuple[float, float, float]

REFERENCE_WHITE: Triple = (95.047, 100.0, 108.883)

_EPSILON = 0.008856
_KAPPA = 7.787
_OFFSET = 16.0 / 116.0

_RGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

_XYZ_TO_RGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)


def srgb_to_linear(value: float) -> float:
    """Convert an sRGB channel (0-255) to linear light (0.0-1.0)."""
    s = value / 255.0
    if s > 0.04045:
        return ((s + 0.055) / 1.055) ** 2.4
    return s / 12.92


def linear_to_srgb(value: float) -> int:
    """Convert linear light (0.0-1.0) back to an sRGB byte."""
    if value <= 0.0031308:
        s = 12.92 * value
    else:
        s = 1.055 * (value ** (1.0 / 2.4)) - 0.055
    return clamp_byte(s * 255.0)


def rgb_to_xyz(r: float, g: float, b: float) -> Triple:
    linear = (srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))
    x, y, z = (
        sum(coefficient * channel for coefficient, channel in zip(row, linear))
        for row in _RGB_TO_XYZ
    )
    return x * 100.0, y * 100.0, z * 100.0


def xyz_to_rgb(x: float, y: float, z: float) -> Tuple[int, int, int]:
    scaled = (x / 100.0, y / 100.0, z / 100.0)
    r, g, b = (
        linear_to_srgb(sum(coefficient * value for coefficient, value in zip(row, scaled)))
        for row in _XYZ_TO_RGB
    )
    return r, g, b


def _pivot(t: float) -> float:
    if t > _EPSILON:
        return t ** (1.0 / 3.0)
    return _KAPPA * t + _OFFSET


def _unpivot(f: float) -> float:
    cube = f ** 3
    if cube > _EPSILON:
        return cube
    return (f - _OFFSET) / _KAPPA


def xyz_to_lab(x: float, y: float, z: float) -> Triple:
    fx = _pivot(x / REFERENCE_WHITE[0])
    fy = _pivot(y / REFERENCE_WHITE[1])
    fz = _pivot(z / REFERENCE_WHITE[2])
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


def lab_to_xyz(lightness: float, a: float, b: float) -> Triple:
    fy = (lightness + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0
    return (
        _unpivot(fx) * REFERENCE_WHITE[0],
        _unpivot(fy) * REFERENCE_WHITE[1],
        _unpivot(fz) * REFERENCE_WHITE[2],
    )


def rgb_to_lab(r: float, g: float, b: float) -> Triple:
    return xyz_to_lab(*rgb_to_xyz(r, g, b))


def lab_to_rgb(lightness: float, a: float, b: float) -> Tuple[int, int, int]:
    return xyz_to_rgb(*lab_to_xyz(lightness, a, b))


def delta_e(lab1: Triple, lab2: Triple) -> float:
    """CIE76 colour difference: Euclidean distance in L*a*b*."""
    return math.sqrt(
        (lab1[0] - lab2[0]) ** 2 + (lab1[1] - lab2[1]) ** 2 + (lab1[2] - lab2[2]) ** 2
    )
