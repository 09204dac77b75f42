"""Numba-optimized resampling kernels.

Kernels write rows [row_start, row_end) of a preallocated destination so
callers can process an image in bands. Per-axis source coordinates are
precomputed by the caller (see :mod:`imgmod.resample.apply`).
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(parallel=True, cache=True, nogil=True)
def resample_bilinear_numba(
    src: NDArray[np.uint8],
    dst: NDArray[np.uint8],
    y0: NDArray[np.int64],
    y1: NDArray[np.int64],
    fy: NDArray[np.float64],
    x0: NDArray[np.int64],
    x1: NDArray[np.int64],
    fx: NDArray[np.float64],
    row_start: int,
    row_end: int,
) -> None:
    """Bilinear resample of an RGBA image (rows row_start..row_end).

    :param src: Source pixels [H, W, 4]
    :param dst: Destination pixels [H', W', 4], written in place
    :param y0: Upper source row per destination row [H']
    :param y1: Lower source row per destination row [H']
    :param fy: Vertical blend weight per destination row [H']
    :param x0: Left source column per destination column [W']
    :param x1: Right source column per destination column [W']
    :param fx: Horizontal blend weight per destination column [W']
    :param row_start: First destination row to write
    :param row_end: One past the last destination row to write
    """
    width = dst.shape[1]
    channels = dst.shape[2]

    for y in prange(row_start, row_end):
        ya = y0[y]
        yb = y1[y]
        wy = fy[y]
        for x in range(width):
            xa = x0[x]
            xb = x1[x]
            wx = fx[x]
            for c in range(channels):
                top = src[ya, xa, c] * (1.0 - wx) + src[ya, xb, c] * wx
                bottom = src[yb, xa, c] * (1.0 - wx) + src[yb, xb, c] * wx
                v = top * (1.0 - wy) + bottom * wy
                if v < 0.0:
                    v = 0.0
                elif v > 255.0:
                    v = 255.0
                dst[y, x, c] = int(v + 0.5)


@njit(parallel=True, cache=True, nogil=True)
def resample_nearest_numba(
    src: NDArray[np.uint8],
    dst: NDArray[np.uint8],
    ys: NDArray[np.int64],
    xs: NDArray[np.int64],
    row_start: int,
    row_end: int,
) -> None:
    """Nearest-neighbour resample of an RGBA image (rows row_start..row_end).

    :param src: Source pixels [H, W, 4]
    :param dst: Destination pixels [H', W', 4], written in place
    :param ys: Source row per destination row [H']
    :param xs: Source column per destination column [W']
    :param row_start: First destination row to write
    :param row_end: One past the last destination row to write
    """
    width = dst.shape[1]
    channels = dst.shape[2]

    for y in prange(row_start, row_end):
        sy = ys[y]
        for x in range(width):
            sx = xs[x]
            for c in range(channels):
                dst[y, x, c] = src[sy, sx, c]
