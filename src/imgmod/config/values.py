"""Configuration value dataclasses with merge support.

AdjustmentValues holds the four user-facing knobs and can be merged with
the + operator to compose presets. TargetSize holds the output pixel
dimensions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import TYPE_CHECKING

from imgmod.config.adjust import CONFIG
from imgmod.constants import DEFAULT_QUALITY

if TYPE_CHECKING:
    from imgmod.bitmap import Bitmap

logger = logging.getLogger(__name__)


@dataclass
class AdjustmentValues:
    """Adjustment parameter values with merge support.

    Color knobs are percentages (100 = unchanged). Merge semantics:
    - brightness, contrast, saturation: multiplicative (a * b / 100)
    - quality: lower wins (the stricter encoder setting)

    Example:
        >>> vivid = AdjustmentValues(saturation=130)
        >>> bright = AdjustmentValues(brightness=110)
        >>> preset = vivid + bright
        >>> # brightness=110, saturation=130
    """

    brightness: float = 100.0
    contrast: float = 100.0
    saturation: float = 100.0
    quality: int = DEFAULT_QUALITY

    def __add__(self, other: AdjustmentValues) -> AdjustmentValues:
        """Merge using composition rules."""
        if not isinstance(other, AdjustmentValues):
            return NotImplemented

        return AdjustmentValues(
            brightness=self.brightness * other.brightness / 100.0,
            contrast=self.contrast * other.contrast / 100.0,
            saturation=self.saturation * other.saturation / 100.0,
            quality=min(self.quality, other.quality),
        )

    def __radd__(self, other):
        """Support sum() with initial value 0."""
        if other == 0:
            return self
        return self.__add__(other)

    def clamp(self) -> AdjustmentValues:
        """Clamp all values to valid ranges.

        Out-of-range input saturates at the nearest bound; quality is also
        rounded to an integer.

        :returns: New AdjustmentValues with clamped values
        :raises ValueError: If any field is not a number
        """
        clamped = AdjustmentValues(
            brightness=CONFIG.brightness.validate(self.brightness),
            contrast=CONFIG.contrast.validate(self.contrast),
            saturation=CONFIG.saturation.validate(self.saturation),
            quality=CONFIG.quality.validate(self.quality),
        )
        if clamped != self:
            logger.debug("[AdjustmentValues] Clamped %s -> %s", self, clamped)
        return clamped

    def is_neutral(self) -> bool:
        """Check if the color knobs are neutral (no pixel change).

        Quality is not considered since it only affects encoding.

        :returns: True if applying these values leaves every pixel unchanged
        """
        return self.brightness == 100.0 and self.contrast == 100.0 and self.saturation == 100.0

    # Multiplicative factors consumed by the kernels

    @property
    def brightness_factor(self) -> float:
        return self.brightness / 100.0

    @property
    def contrast_factor(self) -> float:
        return self.contrast / 100.0

    @property
    def saturation_factor(self) -> float:
        return self.saturation / 100.0


@dataclass(frozen=True)
class TargetSize:
    """Output pixel dimensions.

    Example:
        >>> size = TargetSize.of(bitmap)          # native size
        >>> half = size.scaled(0.5)
        >>> wide = TargetSize.resolve(size, width=800)  # keeps aspect
    """

    width: int
    height: int

    @classmethod
    def of(cls, bitmap: Bitmap) -> TargetSize:
        """Native size of a bitmap."""
        return cls(width=bitmap.width, height=bitmap.height)

    @classmethod
    def resolve(
        cls, native: TargetSize, width: int | None = None, height: int | None = None
    ) -> TargetSize:
        """Resolve a possibly partial size request against a native size.

        When only one dimension is given the other follows the native
        aspect ratio (rounded, at least 1 pixel).

        :param native: Source dimensions
        :param width: Requested width or None
        :param height: Requested height or None
        :returns: Fully specified TargetSize (not yet validated)
        """
        if width is None and height is None:
            return native
        if width is None:
            width = max(1, round(native.width * height / native.height))
        elif height is None:
            height = max(1, round(native.height * width / native.width))
        return cls(width=width, height=height)

    def validate(self) -> TargetSize:
        """Check both dimensions are positive integers.

        :returns: self
        :raises ValueError: If either dimension is not a positive integer
        """
        for name, value in (("width", self.width), ("height", self.height)):
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ValueError(f"Target {name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"Target {name} must be positive, got {value}")
        return self

    def scaled(self, factor: float) -> TargetSize:
        """Scale both dimensions by factor (each at least 1 pixel)."""
        if factor <= 0:
            raise ValueError(f"Scale factor must be positive, got {factor}")
        return TargetSize(
            width=max(1, round(self.width * factor)),
            height=max(1, round(self.height * factor)),
        )

    def as_tuple(self) -> tuple[int, int]:
        return (int(self.width), int(self.height))

    def matches(self, bitmap: Bitmap) -> bool:
        return self.width == bitmap.width and self.height == bitmap.height
