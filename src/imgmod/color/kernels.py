"""Numba-optimized kernels for per-pixel color adjustment.

The fused kernel applies brightness, contrast and saturation in that fixed
order, clamping to the 8-bit channel range after every step and rounding
once at the end. Alpha is copied unchanged.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from imgmod.constants import CHANNEL_MAX, CHANNEL_MID, LUMA_B, LUMA_G, LUMA_R


@njit(cache=True, nogil=True, inline="always")
def _clamp_channel(v: float) -> float:
    if v < 0.0:
        return 0.0
    if v > CHANNEL_MAX:
        return CHANNEL_MAX
    return v


# fastmath stays off: results must match the NumPy reference exactly
@njit(parallel=True, cache=True, nogil=True)
def adjust_pixels_numba(
    src: NDArray[np.uint8],
    dst: NDArray[np.uint8],
    brightness: float,
    contrast: float,
    saturation: float,
    row_start: int,
    row_end: int,
) -> None:
    """Apply brightness -> contrast -> saturation to rows row_start..row_end.

    :param src: Source pixels [H, W, 4]
    :param dst: Output pixels [H, W, 4], written in place
    :param brightness: Brightness factor (1.0 = no change)
    :param contrast: Contrast factor around mid-gray (1.0 = no change)
    :param saturation: Saturation factor around luma (1.0 = no change)
    :param row_start: First row to write
    :param row_end: One past the last row to write
    """
    width = src.shape[1]
    do_brightness = brightness != 1.0
    do_contrast = contrast != 1.0
    do_saturation = saturation != 1.0

    for y in prange(row_start, row_end):
        for x in range(width):
            r = float(src[y, x, 0])
            g = float(src[y, x, 1])
            b = float(src[y, x, 2])

            if do_brightness:
                r = _clamp_channel(r * brightness)
                g = _clamp_channel(g * brightness)
                b = _clamp_channel(b * brightness)

            if do_contrast:
                r = _clamp_channel((r - CHANNEL_MID) * contrast + CHANNEL_MID)
                g = _clamp_channel((g - CHANNEL_MID) * contrast + CHANNEL_MID)
                b = _clamp_channel((b - CHANNEL_MID) * contrast + CHANNEL_MID)

            if do_saturation:
                luma = LUMA_R * r + LUMA_G * g + LUMA_B * b
                r = _clamp_channel(luma + (r - luma) * saturation)
                g = _clamp_channel(luma + (g - luma) * saturation)
                b = _clamp_channel(luma + (b - luma) * saturation)

            dst[y, x, 0] = int(r + 0.5)
            dst[y, x, 1] = int(g + 0.5)
            dst[y, x, 2] = int(b + 0.5)
            dst[y, x, 3] = src[y, x, 3]
