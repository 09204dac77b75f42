"""Apply adjustment values to a Bitmap's colors.

This module provides the core color application function. Brightness,
contrast and saturation always run in that order; reordering them changes
the result wherever a step clamps.
"""

from __future__ import annotations

import logging

import numpy as np

from imgmod.bitmap import Bitmap
from imgmod.config.values import AdjustmentValues
from imgmod.constants import DEFAULT_BAND_ROWS
from imgmod.progress import CancelEvent, ProgressCallback, iter_bands, lerp_range, report

logger = logging.getLogger(__name__)


def apply_adjustments(
    bitmap: Bitmap,
    values: AdjustmentValues,
    *,
    band_rows: int = DEFAULT_BAND_ROWS,
    cancel_event: CancelEvent | None = None,
    progress_callback: ProgressCallback | None = None,
    progress_range: tuple[float, float] = (0.0, 1.0),
) -> Bitmap:
    """Apply brightness, contrast and saturation to every pixel.

    :param bitmap: Source image (not modified)
    :param values: Adjustment values, clamped before use
    :param band_rows: Rows processed between cancellation checks
    :param cancel_event: Aborts the run when set
    :param progress_callback: Receives progress fractions within progress_range
    :param progress_range: Portion of overall progress covered by this stage
    :returns: New Bitmap with adjusted colors and unchanged alpha
    :raises RenderCancelled: If cancel_event is set mid-run
    """
    from imgmod.color.kernels import adjust_pixels_numba

    values = values.clamp()
    report(progress_callback, progress_range[0], cancel_event)

    if values.is_neutral():
        logger.debug("[color] Neutral values, copying")
        report(progress_callback, progress_range[1], cancel_event)
        return bitmap.copy()

    src = bitmap.pixels
    dst = np.empty_like(src)
    for start, end in iter_bands(bitmap.height, band_rows):
        adjust_pixels_numba(
            src,
            dst,
            values.brightness_factor,
            values.contrast_factor,
            values.saturation_factor,
            start,
            end,
        )
        report(progress_callback, lerp_range(progress_range, end / bitmap.height), cancel_event)

    logger.debug(
        "[color] brightness=%.1f contrast=%.1f saturation=%.1f on %dx%d",
        values.brightness,
        values.contrast,
        values.saturation,
        bitmap.width,
        bitmap.height,
    )
    return Bitmap(width=bitmap.width, height=bitmap.height, pixels=dst)
