"""NumPy reference implementation of the color stages.

Each stage works on float64 RGB arrays on the [0, 255] scale and clamps
its output. These functions define the arithmetic the Numba kernel must
reproduce, and let callers compose the stages individually.
"""

from __future__ import annotations

import numpy as np

from imgmod.bitmap import Bitmap
from imgmod.config.values import AdjustmentValues
from imgmod.constants import CHANNEL_MAX, CHANNEL_MID, CHANNEL_MIN, LUMA_B, LUMA_G, LUMA_R


def to_float_rgb(bitmap: Bitmap) -> np.ndarray:
    """Color channels as a new float64 array [H, W, 3]."""
    return bitmap.pixels[:, :, :3].astype(np.float64)


def compute_luma(rgb: np.ndarray) -> np.ndarray:
    """Weighted luma of RGB values.

    :param rgb: Array [..., 3]
    :returns: Array [...] of 0.299R + 0.587G + 0.114B
    """
    return LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]


def adjust_brightness(rgb: np.ndarray, percent: float) -> np.ndarray:
    """Scale channels by percent / 100 and clamp."""
    if percent == 100.0:
        return rgb
    return np.clip(rgb * (percent / 100.0), CHANNEL_MIN, CHANNEL_MAX)


def adjust_contrast(rgb: np.ndarray, percent: float) -> np.ndarray:
    """Stretch channels around mid-gray (127.5) by percent / 100 and clamp."""
    if percent == 100.0:
        return rgb
    return np.clip((rgb - CHANNEL_MID) * (percent / 100.0) + CHANNEL_MID, CHANNEL_MIN, CHANNEL_MAX)


def adjust_saturation(rgb: np.ndarray, percent: float) -> np.ndarray:
    """Blend channels away from (or toward) their luma by percent / 100 and clamp."""
    if percent == 100.0:
        return rgb
    luma = compute_luma(rgb)[..., None]
    return np.clip(luma + (rgb - luma) * (percent / 100.0), CHANNEL_MIN, CHANNEL_MAX)


def quantize(rgb: np.ndarray) -> np.ndarray:
    """Round float channels half-up to uint8."""
    return np.floor(np.clip(rgb, CHANNEL_MIN, CHANNEL_MAX) + 0.5).astype(np.uint8)


def apply_adjustments_reference(bitmap: Bitmap, values: AdjustmentValues) -> Bitmap:
    """Apply brightness -> contrast -> saturation with plain NumPy.

    :param bitmap: Source image (not modified)
    :param values: Adjustment values (assumed already clamped)
    :returns: New Bitmap
    """
    rgb = to_float_rgb(bitmap)
    rgb = adjust_brightness(rgb, values.brightness)
    rgb = adjust_contrast(rgb, values.contrast)
    rgb = adjust_saturation(rgb, values.saturation)

    pixels = np.empty_like(bitmap.pixels)
    pixels[:, :, :3] = quantize(rgb)
    pixels[:, :, 3] = bitmap.pixels[:, :, 3]
    return Bitmap(width=bitmap.width, height=bitmap.height, pixels=pixels)
