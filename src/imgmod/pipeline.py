"""Adjustment pipeline: resample, then color-adjust.

:func:`adjust_image` is the pure entry point. :class:`Pipeline` offers a
fluent API over the same function.

Example:
    >>> from imgmod import Pipeline, load_bitmap
    >>>
    >>> source = load_bitmap("photo.png")
    >>> pipe = (Pipeline()
    ...     .brightness(120)
    ...     .contrast(110)
    ...     .saturation(90)
    ...     .resize(800, 600))
    >>> result = pipe(source)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from imgmod.bitmap import Bitmap
from imgmod.color.apply import apply_adjustments
from imgmod.config.values import AdjustmentValues, TargetSize
from imgmod.constants import DEFAULT_BAND_ROWS, DEFAULT_RESAMPLE_POLICY
from imgmod.progress import CancelEvent, ProgressCallback, report
from imgmod.resample.apply import resample

logger = logging.getLogger(__name__)

# Share of overall progress spent resampling
RESAMPLE_SHARE = 0.4


def adjust_image(
    source: Bitmap,
    size: TargetSize | None = None,
    values: AdjustmentValues | None = None,
    *,
    policy: str = DEFAULT_RESAMPLE_POLICY,
    band_rows: int = DEFAULT_BAND_ROWS,
    cancel_event: CancelEvent | None = None,
    progress_callback: ProgressCallback | None = None,
) -> Bitmap:
    """Resample source to size, then apply brightness, contrast and saturation.

    The source is never modified and the result is always a new Bitmap.
    Parameter values outside their documented ranges are clamped.

    :param source: Decoded source image
    :param size: Target dimensions (default: native size)
    :param values: Adjustment values (default: neutral)
    :param policy: Resample policy, "bilinear" or "nearest"
    :param band_rows: Rows processed between cancellation checks
    :param cancel_event: Aborts the run when set
    :param progress_callback: Receives progress fractions in [0, 1]
    :returns: New Bitmap of exactly size.width x size.height
    :raises ValueError: If size is not positive or a value is not a number
    :raises RenderCancelled: If cancel_event is set mid-run
    """
    size = (TargetSize.of(source) if size is None else size).validate()
    values = (AdjustmentValues() if values is None else values).clamp()

    report(progress_callback, 0.0, cancel_event)

    if size.matches(source):
        # Color stage allocates its own output, so the source can be read directly
        resized = source
        report(progress_callback, RESAMPLE_SHARE, cancel_event)
    else:
        resized = resample(
            source,
            size,
            policy,
            band_rows=band_rows,
            cancel_event=cancel_event,
            progress_callback=progress_callback,
            progress_range=(0.0, RESAMPLE_SHARE),
        )

    result = apply_adjustments(
        resized,
        values,
        band_rows=band_rows,
        cancel_event=cancel_event,
        progress_callback=progress_callback,
        progress_range=(RESAMPLE_SHARE, 1.0),
    )

    logger.info(
        "[Pipeline] Rendered %dx%d -> %dx%d (brightness=%.1f contrast=%.1f saturation=%.1f)",
        source.width,
        source.height,
        result.width,
        result.height,
        values.brightness,
        values.contrast,
        values.saturation,
    )
    return result


@dataclass
class Pipeline:
    """Fluent builder around :func:`adjust_image`.

    Setters replace the current value rather than stacking, since every
    render starts again from the original image.
    """

    _values: AdjustmentValues = field(default_factory=AdjustmentValues)
    _size: TargetSize | None = None
    policy: str = DEFAULT_RESAMPLE_POLICY

    # ========================================================================
    # Color Methods
    # ========================================================================

    def brightness(self, percent: float) -> Pipeline:
        """Set brightness.

        :param percent: Brightness percent (100 = no change)
        :returns: Self for chaining
        """
        self._values = replace(self._values, brightness=percent)
        return self

    def contrast(self, percent: float) -> Pipeline:
        """Set contrast.

        :param percent: Contrast percent (100 = no change)
        :returns: Self for chaining
        """
        self._values = replace(self._values, contrast=percent)
        return self

    def saturation(self, percent: float) -> Pipeline:
        """Set saturation.

        :param percent: Saturation percent (100 = no change, 0 = grayscale)
        :returns: Self for chaining
        """
        self._values = replace(self._values, saturation=percent)
        return self

    def quality(self, quality: int) -> Pipeline:
        """Set encoder quality carried alongside the pixel values.

        :param quality: JPEG quality 1-100
        :returns: Self for chaining
        """
        self._values = replace(self._values, quality=quality)
        return self

    def values(self, values: AdjustmentValues) -> Pipeline:
        """Replace all adjustment values at once."""
        self._values = replace(values)
        return self

    # ========================================================================
    # Geometry
    # ========================================================================

    def resize(self, width: int, height: int) -> Pipeline:
        """Set output dimensions.

        :param width: Output width in pixels
        :param height: Output height in pixels
        :returns: Self for chaining
        :raises ValueError: If either dimension is not positive
        """
        self._size = TargetSize(width, height).validate()
        return self

    def resample_policy(self, policy: str) -> Pipeline:
        self.policy = policy
        return self

    # ========================================================================
    # State
    # ========================================================================

    @property
    def current_values(self) -> AdjustmentValues:
        """Clamped values that apply() will use."""
        return self._values.clamp()

    @property
    def target_size(self) -> TargetSize | None:
        return self._size

    def is_neutral(self) -> bool:
        """True if apply() would return an unchanged copy."""
        return self._size is None and self._values.clamp().is_neutral()

    def reset(self) -> Pipeline:
        """Reset to neutral values and native size."""
        self._values = AdjustmentValues()
        self._size = None
        self.policy = DEFAULT_RESAMPLE_POLICY
        return self

    def apply(
        self,
        bitmap: Bitmap,
        *,
        cancel_event: CancelEvent | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> Bitmap:
        """Run the pipeline on bitmap.

        :param bitmap: Source image (not modified)
        :param cancel_event: Aborts the run when set
        :param progress_callback: Receives progress fractions in [0, 1]
        :returns: New adjusted Bitmap
        """
        return adjust_image(
            bitmap,
            self._size,
            self._values,
            policy=self.policy,
            cancel_event=cancel_event,
            progress_callback=progress_callback,
        )

    def __call__(self, bitmap: Bitmap, **kwargs) -> Bitmap:
        return self.apply(bitmap, **kwargs)
