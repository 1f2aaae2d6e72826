from __future__ import annotations

from typing import Dict, List, Tuple

from ..config import Color
from .buffer import PixelBuffer
from .palette import ColorMethod, nearest_palette_index

# (dx, dy, weight) over a divisor of 16
FLOYD_STEINBERG_WEIGHTS: Tuple[Tuple[int, int, int], ...] = (
    (1, 0, 7),
    (-1, 1, 3),
    (0, 1, 5),
    (1, 1, 1),
)
FLOYD_STEINBERG_DIVISOR = 16


def _share(error: int, weight: int) -> int:
    # Truncate toward zero; ``//`` would floor negative errors.
    return int(error * weight / FLOYD_STEINBERG_DIVISOR)


class DiffusionState:
    """Pending quantization error for the current and next scan row."""

    def __init__(self, width: int) -> None:
        self.width = width
        self.current: List[int] = [0] * (width * 3)
        self.next: List[int] = [0] * (width * 3)

    def pending(self, x: int) -> Tuple[int, int, int]:
        offset = x * 3
        return self.current[offset], self.current[offset + 1], self.current[offset + 2]

    def diffuse(self, x: int, error: Tuple[int, int, int], has_next_row: bool) -> None:
        for dx, dy, weight in FLOYD_STEINBERG_WEIGHTS:
            nx = x + dx
            if nx < 0 or nx >= self.width:
                continue
            if dy:
                if not has_next_row:
                    continue
                row = self.next
            else:
                row = self.current
            offset = nx * 3
            for channel in range(3):
                row[offset + channel] += _share(error[channel], weight)

    def advance(self) -> None:
        self.current = self.next
        self.next = [0] * (self.width * 3)


def floyd_steinberg_dither(
    buffer: PixelBuffer,
    reference_palette: Tuple[Color, ...],
    output_palette: Tuple[Color, ...],
    method: ColorMethod = ColorMethod.RGB,
) -> PixelBuffer:
    """Quantize ``buffer`` with Floyd-Steinberg error diffusion.

    Matching and error are computed against ``reference_palette``; the pixel is
    painted with the entry at the same index in ``output_palette``. Single
    left-to-right pass per row, alpha untouched.
    """
    width, height = buffer.width, buffer.height
    data = bytearray(buffer.data)
    state = DiffusionState(width)
    matches: Dict[Tuple[int, int, int], int] = {}

    for y in range(height):
        has_next_row = y + 1 < height
        for x in range(width):
            offset = (y * width + x) * 4
            er, eg, eb = state.pending(x)
            working = (
                max(0, min(255, data[offset] + er)),
                max(0, min(255, data[offset + 1] + eg)),
                max(0, min(255, data[offset + 2] + eb)),
            )

            index = matches.get(working)
            if index is None:
                index = nearest_palette_index(working, reference_palette, method)
                matches[working] = index

            data[offset:offset + 3] = bytes(output_palette[index])

            reference = reference_palette[index]
            error = (
                working[0] - reference[0],
                working[1] - reference[1],
                working[2] - reference[2],
            )
            if error != (0, 0, 0):
                state.diffuse(x, error, has_next_row)
        state.advance()

    return PixelBuffer(width, height, bytes(data))
