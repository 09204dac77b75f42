"""
Resample module - bilinear and nearest-neighbour resizing of RGBA bitmaps.

Example:
    >>> from imgmod.resample import resample
    >>> from imgmod.config import TargetSize
    >>> small = resample(bitmap, TargetSize(320, 240))
"""

from imgmod.resample.apply import bilinear_coords, nearest_coords, resample

__all__ = [
    "resample",
    "bilinear_coords",
    "nearest_coords",
]
