"""Resample a Bitmap onto a new pixel grid.

Coordinate mapping uses pixel centers: destination index ``d`` maps to
source coordinate ``(d + 0.5) * (src_len / dst_len) - 0.5``. Bilinear
sampling clamps that coordinate to ``[0, src_len - 1]`` so edges repeat
and nothing is read out of bounds. Resampling to the native size is an
exact copy.
"""

from __future__ import annotations

import logging

import numpy as np

from imgmod.bitmap import Bitmap
from imgmod.config.values import TargetSize
from imgmod.constants import DEFAULT_BAND_ROWS, DEFAULT_RESAMPLE_POLICY, RESAMPLE_POLICIES
from imgmod.progress import CancelEvent, ProgressCallback, iter_bands, lerp_range, report

logger = logging.getLogger(__name__)


def bilinear_coords(src_len: int, dst_len: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Per-axis source indices and blend weights for bilinear sampling.

    :param src_len: Source length along the axis
    :param dst_len: Destination length along the axis
    :returns: (lower index, upper index, weight of upper) arrays of length dst_len
    """
    scale = src_len / dst_len
    coords = (np.arange(dst_len, dtype=np.float64) + 0.5) * scale - 0.5
    coords = np.clip(coords, 0.0, src_len - 1)
    i0 = np.floor(coords).astype(np.int64)
    i1 = np.minimum(i0 + 1, src_len - 1)
    frac = coords - i0
    return i0, i1, frac


def nearest_coords(src_len: int, dst_len: int) -> np.ndarray:
    """Per-axis source index of the nearest pixel center."""
    scale = src_len / dst_len
    idx = np.floor((np.arange(dst_len, dtype=np.float64) + 0.5) * scale).astype(np.int64)
    return np.minimum(idx, src_len - 1)


def resample(
    bitmap: Bitmap,
    size: TargetSize,
    policy: str = DEFAULT_RESAMPLE_POLICY,
    *,
    band_rows: int = DEFAULT_BAND_ROWS,
    cancel_event: CancelEvent | None = None,
    progress_callback: ProgressCallback | None = None,
    progress_range: tuple[float, float] = (0.0, 1.0),
) -> Bitmap:
    """Resample a bitmap to the target size.

    :param bitmap: Source image (not modified)
    :param size: Target dimensions
    :param policy: "bilinear" (default) or "nearest"
    :param band_rows: Rows processed between cancellation checks
    :param cancel_event: Aborts the resample when set
    :param progress_callback: Receives progress fractions within progress_range
    :param progress_range: Portion of overall progress covered by this stage
    :returns: New Bitmap of exactly size.width x size.height
    :raises ValueError: If size is invalid or policy is unknown
    :raises RenderCancelled: If cancel_event is set mid-run
    """
    from imgmod.resample.kernels import resample_bilinear_numba, resample_nearest_numba

    size.validate()
    if policy not in RESAMPLE_POLICIES:
        raise ValueError(f"Unknown resample policy '{policy}'. Available: {', '.join(RESAMPLE_POLICIES)}")

    report(progress_callback, progress_range[0], cancel_event)

    if size.matches(bitmap):
        logger.debug("[resample] Target equals native %dx%d, copying", bitmap.width, bitmap.height)
        report(progress_callback, progress_range[1], cancel_event)
        return bitmap.copy()

    dst_w, dst_h = size.as_tuple()
    dst = np.empty((dst_h, dst_w, bitmap.pixels.shape[2]), dtype=np.uint8)
    src = bitmap.pixels

    if policy == "bilinear":
        y0, y1, fy = bilinear_coords(bitmap.height, dst_h)
        x0, x1, fx = bilinear_coords(bitmap.width, dst_w)
        for start, end in iter_bands(dst_h, band_rows):
            resample_bilinear_numba(src, dst, y0, y1, fy, x0, x1, fx, start, end)
            report(progress_callback, lerp_range(progress_range, end / dst_h), cancel_event)
    else:
        ys = nearest_coords(bitmap.height, dst_h)
        xs = nearest_coords(bitmap.width, dst_w)
        for start, end in iter_bands(dst_h, band_rows):
            resample_nearest_numba(src, dst, ys, xs, start, end)
            report(progress_callback, lerp_range(progress_range, end / dst_h), cancel_event)

    logger.debug(
        "[resample] %s %dx%d -> %dx%d",
        policy,
        bitmap.width,
        bitmap.height,
        dst_w,
        dst_h,
    )
    return Bitmap(width=dst_w, height=dst_h, pixels=dst)
