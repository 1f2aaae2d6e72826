from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Tuple

from PIL import Image

from ..config import EXCLUDED_INDEX, PALETTE_MEASURED, PALETTE_THEORETICAL, Color
from .colorspace import Triple, delta_e, rgb_to_lab


class ColorMethod(str, Enum):
    RGB = "rgb"
    LAB = "lab"


@lru_cache(maxsize=None)
def lab_palette(palette: Tuple[Color, ...]) -> Tuple[Triple, ...]:
    """L*a*b* coordinates of ``palette``; computed once per palette."""
    return tuple(rgb_to_lab(*color) for color in palette)


LAB_PALETTE = lab_palette(PALETTE_MEASURED)


def select_palette(measured: bool) -> Tuple[Color, ...]:
    return PALETTE_MEASURED if measured else PALETTE_THEORETICAL


def nearest_palette_index(
    rgb: Tuple[int, int, int],
    palette: Tuple[Color, ...] = PALETTE_MEASURED,
    method: ColorMethod = ColorMethod.RGB,
) -> int:
    """Index of the closest entry in ``palette``, never ``EXCLUDED_INDEX``.

    Ties keep the lowest index.
    """
    best_index = 1
    best_distance = float("inf")
    if method == ColorMethod.LAB:
        target = rgb_to_lab(*rgb)
        for index, lab in enumerate(lab_palette(palette)):
            if index == EXCLUDED_INDEX:
                continue
            distance = delta_e(target, lab)
            if distance < best_distance:
                best_distance = distance
                best_index = index
        return best_index

    r, g, b = rgb
    for index, (R, G, B) in enumerate(palette):
        if index == EXCLUDED_INDEX:
            continue
        distance = (R - r) ** 2 + (G - g) ** 2 + (B - b) ** 2
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index


def palette_image(palette: Tuple[Color, ...]) -> Image.Image:
    """A swatch strip with one 16px square per palette entry."""
    swatch = Image.new("RGB", (16 * len(palette), 16))
    for index, color in enumerate(palette):
        swatch.paste(color, (index * 16, 0, (index + 1) * 16, 16))
    return swatch
