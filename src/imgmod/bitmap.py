"""Bitmap container for decoded raster images.

A Bitmap is a thin, validated wrapper around a NumPy ``uint8`` array of
shape ``(height, width, 4)`` holding straight (non-premultiplied) RGBA
samples in ``[0, 255]``, row-major with a top-left origin.

The pipeline never mutates a Bitmap it receives; every stage allocates a
new pixel buffer for its output.

Example:
    >>> import numpy as np
    >>> from imgmod import Bitmap
    >>> bmp = Bitmap.from_array(np.zeros((2, 3, 3), dtype=np.uint8))
    >>> bmp.width, bmp.height
    (3, 2)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from imgmod.constants import NUM_CHANNELS


@dataclass(eq=False)
class Bitmap:
    """Decoded RGBA image.

    Attributes:
        width: Number of columns (positive)
        height: Number of rows (positive)
        pixels: ``uint8`` array of shape ``(height, width, 4)``
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if not isinstance(self.pixels, np.ndarray):
            raise TypeError(f"pixels must be a NumPy array, got {type(self.pixels).__name__}")
        if self.pixels.dtype != np.uint8:
            raise TypeError(f"pixels must have dtype=uint8, got {self.pixels.dtype}")
        if self.pixels.ndim != 3 or self.pixels.shape[2] != NUM_CHANNELS:
            raise ValueError(
                f"pixels must have shape (height, width, {NUM_CHANNELS}), got {self.pixels.shape}"
            )
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Bitmap dimensions must be positive, got {self.width}x{self.height}")
        if self.pixels.shape[:2] != (self.height, self.width):
            raise ValueError(
                f"pixels shape {self.pixels.shape[:2]} does not match "
                f"height x width ({self.height}, {self.width})"
            )
        if not self.pixels.flags["C_CONTIGUOUS"]:
            self.pixels = np.ascontiguousarray(self.pixels)

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def from_array(cls, array: np.ndarray) -> Bitmap:
        """Build a Bitmap from a gray, RGB or RGBA ``uint8`` array.

        Missing alpha is filled with 255 (opaque). The input is copied.

        :param array: Array of shape (H, W), (H, W, 3) or (H, W, 4)
        :returns: New Bitmap
        :raises TypeError: If array is not uint8
        :raises ValueError: If the shape is not a supported image layout
        """
        array = np.asarray(array)
        if array.dtype != np.uint8:
            raise TypeError(f"array must have dtype=uint8, got {array.dtype}")

        if array.ndim == 2:
            array = np.repeat(array[:, :, None], 3, axis=2)
        if array.ndim != 3 or array.shape[2] not in (3, NUM_CHANNELS):
            raise ValueError(f"Unsupported image array shape {array.shape}")

        height, width = array.shape[:2]
        pixels = np.empty((height, width, NUM_CHANNELS), dtype=np.uint8)
        pixels[:, :, :3] = array[:, :, :3]
        if array.shape[2] == NUM_CHANNELS:
            pixels[:, :, 3] = array[:, :, 3]
        else:
            pixels[:, :, 3] = 255
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def blank(cls, width: int, height: int, color: tuple[int, int, int, int] = (0, 0, 0, 255)) -> Bitmap:
        """Create a Bitmap filled with a single RGBA color."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Bitmap dimensions must be positive, got {width}x{height}")
        pixels = np.empty((height, width, NUM_CHANNELS), dtype=np.uint8)
        pixels[:, :] = np.asarray(color, dtype=np.uint8)
        return cls(width=width, height=height, pixels=pixels)

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def shape(self) -> tuple[int, int]:
        """(width, height) of the image."""
        return (self.width, self.height)

    @property
    def rgb(self) -> np.ndarray:
        """Read-only view of the color channels [H, W, 3]."""
        view = self.pixels[:, :, :3]
        view.flags.writeable = False
        return view

    @property
    def alpha(self) -> np.ndarray:
        """Read-only view of the alpha channel [H, W]."""
        view = self.pixels[:, :, 3]
        view.flags.writeable = False
        return view

    @property
    def nbytes(self) -> int:
        return self.pixels.nbytes

    def has_alpha(self) -> bool:
        """True if any pixel is not fully opaque."""
        return bool((self.pixels[:, :, 3] != 255).any())

    def copy(self) -> Bitmap:
        """Deep copy with an independent pixel buffer."""
        return Bitmap(width=self.width, height=self.height, pixels=self.pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height}, RGBA uint8)"
