from __future__ import annotations

from typing import List

from .buffer import PixelBuffer, apply_channel_lut, clamp_byte


def exposure_lut(exposure: float) -> List[int]:
    return [clamp_byte(value * exposure) for value in range(256)]


def contrast_lut(contrast: float) -> List[int]:
    return [clamp_byte((value - 128.0) * contrast + 128.0) for value in range(256)]


def _curve_point(
    normalized: float,
    shadow_exponent: float,
    highlight_exponent: float,
    midpoint: float,
) -> float:
    if normalized <= midpoint:
        base = normalized / midpoint
        # 0 ** negative diverges; saturate to white.
        if base == 0.0 and shadow_exponent < 0:
            return 1.0
        return (base ** shadow_exponent) * midpoint
    base = (normalized - midpoint) / (1.0 - midpoint)
    return midpoint + (base ** highlight_exponent) * (1.0 - midpoint)


def scurve_lut(
    strength: float,
    shadow_boost: float,
    highlight_compress: float,
    midpoint: float,
) -> List[int]:
    """Split tone curve pivoting on ``midpoint``.

    Shadows use the exponent ``1 - strength * shadow_boost``, highlights
    ``1 + strength * highlight_compress``.
    """
    shadow_exponent = 1.0 - strength * shadow_boost
    highlight_exponent = 1.0 + strength * highlight_compress
    return [
        clamp_byte(
            _curve_point(value / 255.0, shadow_exponent, highlight_exponent, midpoint) * 255.0
        )
        for value in range(256)
    ]


def apply_exposure(buffer: PixelBuffer, exposure: float) -> PixelBuffer:
    if exposure == 1.0:
        return buffer
    return apply_channel_lut(buffer, exposure_lut(exposure))


def apply_contrast(buffer: PixelBuffer, contrast: float) -> PixelBuffer:
    if contrast == 1.0:
        return buffer
    return apply_channel_lut(buffer, contrast_lut(contrast))


def apply_scurve(
    buffer: PixelBuffer,
    strength: float,
    shadow_boost: float,
    highlight_compress: float,
    midpoint: float,
) -> PixelBuffer:
    if strength == 0:
        return buffer
    lut = scurve_lut(strength, shadow_boost, highlight_compress, midpoint)
    return apply_channel_lut(buffer, lut)


def rgb_to_hsl(r: int, g: int, b: int):
    """Return ``(h, s, l)`` in 0..1, or ``None`` for achromatic pixels."""
    rn, gn, bn = r / 255.0, g / 255.0, b / 255.0
    max_val = max(rn, gn, bn)
    min_val = min(rn, gn, bn)
    lightness = (max_val + min_val) / 2.0
    if max_val == min_val:
        return None

    delta = max_val - min_val
    if lightness > 0.5:
        saturation = delta / (2.0 - max_val - min_val)
    else:
        saturation = delta / (max_val + min_val)

    if max_val == rn:
        hue = ((gn - bn) / delta + (6.0 if g < b else 0.0)) / 6.0
    elif max_val == gn:
        hue = ((bn - rn) / delta + 2.0) / 6.0
    else:
        hue = ((rn - gn) / delta + 4.0) / 6.0
    return hue, saturation, lightness


def hsl_to_rgb(hue: float, saturation: float, lightness: float):
    chroma = (1.0 - abs(2.0 * lightness - 1.0)) * saturation
    x = chroma * (1.0 - abs((hue * 6.0) % 2.0 - 1.0))
    m = lightness - chroma / 2.0

    sector = int(hue * 6.0)
    if sector == 0:
        rp, gp, bp = chroma, x, 0.0
    elif sector == 1:
        rp, gp, bp = x, chroma, 0.0
    elif sector == 2:
        rp, gp, bp = 0.0, chroma, x
    elif sector == 3:
        rp, gp, bp = 0.0, x, chroma
    elif sector == 4:
        rp, gp, bp = x, 0.0, chroma
    else:
        rp, gp, bp = chroma, 0.0, x
    return (
        clamp_byte((rp + m) * 255.0),
        clamp_byte((gp + m) * 255.0),
        clamp_byte((bp + m) * 255.0),
    )


def apply_saturation(buffer: PixelBuffer, saturation: float) -> PixelBuffer:
    if saturation == 1.0:
        return buffer

    data = bytearray(buffer.data)
    converted = {}
    for offset in range(0, len(data), 4):
        rgb = (data[offset], data[offset + 1], data[offset + 2])
        result = converted.get(rgb)
        if result is None:
            hsl = rgb_to_hsl(*rgb)
            if hsl is None:
                result = rgb
            else:
                hue, sat, lightness = hsl
                result = hsl_to_rgb(hue, max(0.0, min(1.0, sat * saturation)), lightness)
            converted[rgb] = result
        data[offset:offset + 3] = bytes(result)
    return PixelBuffer(buffer.width, buffer.height, bytes(data))
