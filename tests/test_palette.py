from PIL import Image

from photoframe.config import EXCLUDED_INDEX, PALETTE_MEASURED, PALETTE_THEORETICAL
from photoframe.processing.palette import (
    LAB_PALETTE,
    ColorMethod,
    lab_palette,
    nearest_palette_index,
    palette_image,
    select_palette,
)


def test_palettes_are_index_aligned_with_duplicate_black():
    assert len(PALETTE_MEASURED) == len(PALETTE_THEORETICAL) == 7
    assert PALETTE_THEORETICAL[EXCLUDED_INDEX] == (0, 0, 0)
    assert PALETTE_THEORETICAL[0] == (0, 0, 0)


def test_excluded_index_is_never_matched_even_on_exact_hit():
    # (0, 0, 0) is exactly index 4 of the measured palette
    assert nearest_palette_index((0, 0, 0), PALETTE_MEASURED) == 0
    assert nearest_palette_index((0, 0, 0), PALETTE_MEASURED, ColorMethod.LAB) == 0
    assert nearest_palette_index((0, 0, 0), PALETTE_THEORETICAL) == 0


def test_rgb_metric_picks_nearest_entry():
    assert nearest_palette_index((250, 250, 250), PALETTE_THEORETICAL) == 1
    assert nearest_palette_index((240, 20, 10), PALETTE_THEORETICAL) == 3
    assert nearest_palette_index((10, 20, 230), PALETTE_THEORETICAL) == 5
    assert nearest_palette_index((200, 200, 200), PALETTE_MEASURED) == 1


def test_ties_keep_the_lowest_index():
    palette = ((0, 0, 0), (10, 0, 0), (20, 0, 0), (99, 99, 99), (15, 0, 0), (99, 99, 99), (99, 99, 99))
    assert nearest_palette_index((15, 0, 0), palette) == 1


def test_lab_metric_uses_cached_measured_table():
    assert lab_palette(PALETTE_MEASURED) is LAB_PALETTE
    assert len(LAB_PALETTE) == 7
    assert nearest_palette_index((190, 190, 190), PALETTE_MEASURED, ColorMethod.LAB) == 1
    assert nearest_palette_index((40, 100, 60), PALETTE_MEASURED, ColorMethod.LAB) == 6


def test_select_palette():
    assert select_palette(True) is PALETTE_MEASURED
    assert select_palette(False) is PALETTE_THEORETICAL


def test_palette_image_has_one_swatch_per_entry():
    swatch = palette_image(PALETTE_MEASURED)

    assert swatch.size == (16 * 7, 16)
    assert isinstance(swatch, Image.Image)
    for index, color in enumerate(PALETTE_MEASURED):
        assert swatch.getpixel((index * 16 + 8, 8)) == color
