"""Image processing pipeline components for the photo frame."""

from .buffer import PixelBuffer, clamp_byte
from .dither import DiffusionState, floyd_steinberg_dither
from .enhance import apply_contrast, apply_exposure, apply_saturation, apply_scurve
from .palette import LAB_PALETTE, ColorMethod, lab_palette, nearest_palette_index, select_palette
from .params import OptimizationParams, ProcessingMode, ToneMode
from .payload import TransferPayload, build_payload
from .pipeline import adjust_buffer, dither_policy, optimize, optimize_full, optimize_preview
from .resample import (
    cover_fit,
    cover_scale,
    decode_image,
    full_canvas,
    normalize_orientation,
    preview_canvas,
    thumbnail_canvas,
)

__all__ = [
    "PixelBuffer",
    "clamp_byte",
    "DiffusionState",
    "floyd_steinberg_dither",
    "apply_contrast",
    "apply_exposure",
    "apply_saturation",
    "apply_scurve",
    "LAB_PALETTE",
    "ColorMethod",
    "lab_palette",
    "nearest_palette_index",
    "select_palette",
    "OptimizationParams",
    "ProcessingMode",
    "ToneMode",
    "TransferPayload",
    "build_payload",
    "adjust_buffer",
    "dither_policy",
    "optimize",
    "optimize_full",
    "optimize_preview",
    "cover_fit",
    "cover_scale",
    "decode_image",
    "full_canvas",
    "normalize_orientation",
    "preview_canvas",
    "thumbnail_canvas",
]
