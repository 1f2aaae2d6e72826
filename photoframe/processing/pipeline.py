from __future__ import annotations

import logging
import time
from typing import Tuple

from PIL import Image

from ..config import PALETTE_MEASURED, PALETTE_THEORETICAL
from .buffer import PixelBuffer
from .dither import floyd_steinberg_dither
from .enhance import apply_contrast, apply_exposure, apply_saturation, apply_scurve
from .palette import ColorMethod, select_palette
from .params import OptimizationParams, ToneMode
from .resample import cover_fit, full_canvas, preview_canvas

logger = logging.getLogger(__name__)


def adjust_buffer(buffer: PixelBuffer, params: OptimizationParams) -> PixelBuffer:
    """Exposure, saturation, then the selected tone curve. Stock mode is a no-op."""
    if params.is_stock:
        return buffer

    buffer = apply_exposure(buffer, params.exposure)
    buffer = apply_saturation(buffer, params.saturation)
    if params.tone_mode == ToneMode.CONTRAST:
        return apply_contrast(buffer, params.contrast)
    return apply_scurve(
        buffer,
        params.strength,
        params.shadow_boost,
        params.highlight_compress,
        params.midpoint,
    )


def dither_policy(params: OptimizationParams):
    """Return ``(method, reference_palette, output_palette)`` for ``params``."""
    output_palette = select_palette(params.render_measured)
    if params.is_stock:
        return ColorMethod.RGB, PALETTE_THEORETICAL, output_palette
    return params.color_method, PALETTE_MEASURED, output_palette


def optimize_buffer(buffer: PixelBuffer, params: OptimizationParams) -> PixelBuffer:
    adjusted = adjust_buffer(buffer, params)
    method, reference, output = dither_policy(params)
    return floyd_steinberg_dither(adjusted, reference, output, method)


def optimize(
    img: Image.Image,
    target_size: Tuple[int, int],
    params: OptimizationParams,
) -> Image.Image:
    """Cover-fit ``img`` into ``target_size``, adjust and dither it."""
    started = time.perf_counter()
    canvas = cover_fit(img, target_size)
    result = optimize_buffer(PixelBuffer.from_image(canvas), params).to_image()
    logger.debug(
        "optimized %sx%s (%s, %s) in %.3fs",
        target_size[0],
        target_size[1],
        params.processing_mode.value,
        params.color_method.value,
        time.perf_counter() - started,
    )
    return result


def optimize_full(img: Image.Image, params: OptimizationParams) -> Image.Image:
    return optimize(img, full_canvas(img.size), params)


def optimize_preview(img: Image.Image, params: OptimizationParams) -> Image.Image:
    return optimize(img, preview_canvas(img.size), params)
