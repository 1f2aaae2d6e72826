import io

from PIL import Image

from photoframe.processing.payload import build_payload, encode_jpeg


def open_jpeg(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    assert img.format == "JPEG"
    return img


def test_landscape_payload_sizes():
    payload = build_payload(Image.new("RGB", (1600, 900), (120, 60, 30)))

    assert payload.orientation == "landscape"
    assert payload.full_size == (800, 480)
    assert payload.thumb_size == (200, 120)
    assert open_jpeg(payload.full_jpeg).size == (800, 480)
    assert open_jpeg(payload.thumb_jpeg).size == (200, 120)


def test_portrait_payload_sizes():
    payload = build_payload(Image.new("RGB", (900, 1600), (10, 200, 30)))

    assert payload.orientation == "portrait"
    assert open_jpeg(payload.full_jpeg).size == (480, 800)
    assert open_jpeg(payload.thumb_jpeg).size == (120, 200)


def test_payload_keeps_original_colors():
    payload = build_payload(Image.new("RGBA", (1000, 600), (120, 60, 200, 255)))

    r, g, b = open_jpeg(payload.full_jpeg).convert("RGB").getpixel((400, 240))
    assert abs(r - 120) <= 4
    assert abs(g - 60) <= 4
    assert abs(b - 200) <= 4


def test_lower_quality_produces_smaller_output():
    src = Image.effect_noise((200, 120), 64).convert("RGB")

    assert len(encode_jpeg(src, 30)) < len(encode_jpeg(src, 95))

