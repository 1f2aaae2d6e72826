from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Tuple

from PIL import Image

from ..config import SETTINGS
from ..errors import ProcessingFailure
from .resample import cover_fit, full_canvas, is_portrait, thumbnail_canvas


@dataclass(frozen=True)
class TransferPayload:
    orientation: str
    full_size: Tuple[int, int]
    thumb_size: Tuple[int, int]
    full_jpeg: bytes
    thumb_jpeg: bytes


def encode_jpeg(img: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    try:
        img.convert("RGB").save(buffer, "JPEG", quality=quality)
    except (OSError, ValueError) as exc:
        raise ProcessingFailure(f"JPEG encoding failed: {exc}") from exc
    return buffer.getvalue()


def build_payload(
    img: Image.Image,
    full_quality: int = SETTINGS.full_quality,
    thumb_quality: int = SETTINGS.thumb_quality,
) -> TransferPayload:
    """Render the full-size and thumbnail JPEGs sent to the frame.

    ``img`` must already be orientation-normalized. No tone adjustment or
    dithering happens on this path.
    """
    full_size = full_canvas(img.size)
    thumb_size = thumbnail_canvas(img.size)
    full_jpeg = encode_jpeg(cover_fit(img, full_size), full_quality)
    thumb_jpeg = encode_jpeg(cover_fit(img, thumb_size), thumb_quality)
    return TransferPayload(
        orientation="portrait" if is_portrait(img.size) else "landscape",
        full_size=full_size,
        thumb_size=thumb_size,
        full_jpeg=full_jpeg,
        thumb_jpeg=thumb_jpeg,
    )
