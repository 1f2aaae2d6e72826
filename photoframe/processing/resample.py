from __future__ import annotations

import io
from typing import Tuple

from PIL import Image, ImageOps

from ..config import FULL_SIZE, PREVIEW_SCALE, THUMB_SIZE
from ..errors import ProcessingFailure

Size = Tuple[int, int]

_ORIENTATION_TAG = 0x0112
_UPRIGHT = 1

_PIL_ERRORS = (OSError, ValueError, MemoryError, Image.DecompressionBombError)


def is_portrait(size: Size) -> bool:
    width, height = size
    return height > width


def _oriented(base: Size, size: Size) -> Size:
    long_side, short_side = max(base), min(base)
    return (short_side, long_side) if is_portrait(size) else (long_side, short_side)


def full_canvas(size: Size) -> Size:
    return _oriented(FULL_SIZE, size)


def thumbnail_canvas(size: Size) -> Size:
    return _oriented(THUMB_SIZE, size)


def preview_canvas(size: Size) -> Size:
    width, height = full_canvas(size)
    return int(round(width * PREVIEW_SCALE)), int(round(height * PREVIEW_SCALE))


def normalize_orientation(img: Image.Image) -> Image.Image:
    """Rotate/flip pixels so storage order matches the EXIF orientation.

    Already-upright images are returned as-is, not copied.
    """
    orientation = img.getexif().get(_ORIENTATION_TAG, _UPRIGHT)
    if orientation == _UPRIGHT:
        return img
    try:
        return ImageOps.exif_transpose(img)
    except _PIL_ERRORS as exc:
        raise ProcessingFailure(f"Failed to normalize orientation: {exc}") from exc


def decode_image(data: bytes) -> Image.Image:
    """Open encoded image bytes and return them upright and fully loaded."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except _PIL_ERRORS as exc:
        raise ProcessingFailure(f"Unsupported or corrupt image: {exc}") from exc
    return normalize_orientation(img)


def cover_scale(source: Size, target: Size) -> float:
    """Scale factor that makes ``source`` fully cover ``target``."""
    return max(target[0] / source[0], target[1] / source[1])


def cover_fit(img: Image.Image, target: Size) -> Image.Image:
    """Scale ``img`` to cover ``target`` and center-crop the overflow.

    The result is always exactly ``target`` in RGBA mode.
    """
    target_w, target_h = target
    if target_w <= 0 or target_h <= 0 or img.width <= 0 or img.height <= 0:
        raise ProcessingFailure(f"Cannot fit {img.size} into {target}")

    scale = cover_scale(img.size, target)
    scaled_w = max(target_w, int(round(img.width * scale)))
    scaled_h = max(target_h, int(round(img.height * scale)))
    left = (scaled_w - target_w) // 2
    top = (scaled_h - target_h) // 2

    try:
        src = img if img.mode == "RGBA" else img.convert("RGBA")
        scaled = src.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)
        canvas = scaled.crop((left, top, left + target_w, top + target_h))
    except _PIL_ERRORS as exc:
        raise ProcessingFailure(f"Failed to render {target_w}x{target_h} canvas: {exc}") from exc
    return canvas
