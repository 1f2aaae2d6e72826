from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from PIL import Image

from ..errors import ProcessingFailure

_IDENTITY_LUT = list(range(256))


def clamp_byte(value: float) -> int:
    """Round half away from zero, then clamp into ``0..255``."""
    if math.isnan(value):
        return 0
    if value >= 255:
        return 255
    if value <= 0:
        return 0
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major interleaved RGBA samples."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise ValueError(
                f"Buffer holds {len(self.data)} bytes, expected {expected} for "
                f"{self.width}x{self.height} RGBA"
            )

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        try:
            rgba = img if img.mode == "RGBA" else img.convert("RGBA")
            return cls(rgba.width, rgba.height, rgba.tobytes())
        except (OSError, ValueError, MemoryError) as exc:
            raise ProcessingFailure(f"Failed to extract pixel buffer: {exc}") from exc

    def to_image(self) -> Image.Image:
        try:
            return Image.frombytes("RGBA", (self.width, self.height), self.data)
        except (OSError, ValueError, MemoryError) as exc:
            raise ProcessingFailure(f"Failed to rebuild image from buffer: {exc}") from exc

    def pixel(self, x: int, y: int):
        offset = (y * self.width + x) * 4
        return tuple(self.data[offset:offset + 4])

    def rgb_pixels(self):
        data = self.data
        return [tuple(data[i:i + 3]) for i in range(0, len(data), 4)]


def apply_channel_lut(buffer: PixelBuffer, lut: Sequence[int]) -> PixelBuffer:
    """Map R, G and B through the same 256-entry table; alpha passes through."""
    img = buffer.to_image()
    mapped = img.point(list(lut) * 3 + _IDENTITY_LUT)
    return PixelBuffer(buffer.width, buffer.height, mapped.tobytes())
