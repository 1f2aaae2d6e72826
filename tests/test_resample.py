import io

import pytest
from PIL import Image

from photoframe.errors import ProcessingFailure
from photoframe.processing.resample import (
    cover_fit,
    cover_scale,
    decode_image,
    full_canvas,
    normalize_orientation,
    preview_canvas,
    thumbnail_canvas,
)


def test_cover_scale_uses_the_larger_axis_ratio():
    assert cover_scale((1000, 500), (800, 480)) == pytest.approx(0.96)
    assert cover_scale((500, 1000), (800, 480)) == pytest.approx(1.6)
    assert cover_scale((100, 100), (200, 50)) == pytest.approx(2.0)


@pytest.mark.parametrize(
    "source, target",
    [
        ((1000, 500), (800, 480)),
        ((500, 1000), (800, 480)),
        ((333, 777), (480, 800)),
        ((7, 3), (200, 120)),
        ((4000, 3000), (320, 192)),
        ((800, 480), (800, 480)),
    ],
)
def test_cover_fit_always_returns_the_exact_target(source, target):
    src = Image.new("RGB", source, (40, 80, 120))

    result = cover_fit(src, target)

    assert result.size == target
    assert result.mode == "RGBA"
    # cover never letterboxes, so no transparent padding appears
    assert result.getextrema()[3] == (255, 255)


def test_cover_fit_crops_around_the_center():
    src = Image.new("RGB", (300, 100), (255, 0, 0))
    src.paste((0, 255, 0), (100, 0, 200, 100))
    src.paste((0, 0, 255), (200, 0, 300, 100))

    result = cover_fit(src, (100, 100))

    assert result.getpixel((0, 0)) == (0, 255, 0, 255)
    assert result.getpixel((50, 50)) == (0, 255, 0, 255)
    assert result.getpixel((99, 99)) == (0, 255, 0, 255)


def test_cover_fit_rejects_empty_target():
    with pytest.raises(ProcessingFailure):
        cover_fit(Image.new("RGB", (10, 10)), (0, 10))


def test_canvases_follow_orientation():
    assert full_canvas((1000, 500)) == (800, 480)
    assert full_canvas((500, 1000)) == (480, 800)
    assert full_canvas((600, 600)) == (800, 480)
    assert thumbnail_canvas((1000, 500)) == (200, 120)
    assert thumbnail_canvas((500, 1000)) == (120, 200)
    assert preview_canvas((1000, 500)) == (320, 192)
    assert preview_canvas((500, 1000)) == (192, 320)


def test_upright_image_is_returned_without_copy():
    img = Image.new("RGB", (4, 2))

    assert normalize_orientation(img) is img


def test_decode_image_applies_exif_rotation():
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 degrees clockwise for display
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), (200, 10, 10)).save(buffer, "JPEG", exif=exif.tobytes())

    img = decode_image(buffer.getvalue())

    assert img.size == (20, 40)
    assert normalize_orientation(img) is img


def test_decode_image_rejects_garbage():
    with pytest.raises(ProcessingFailure):
        decode_image(b"definitely not an image")
