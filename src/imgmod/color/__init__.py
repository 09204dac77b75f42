"""
Color processing module - brightness, contrast and saturation adjustments.

Example:
    >>> from imgmod.color import apply_adjustments
    >>> from imgmod.config import AdjustmentValues
    >>> result = apply_adjustments(bitmap, AdjustmentValues(brightness=120, saturation=80))

Stage-by-stage (NumPy reference):
    >>> from imgmod.color import adjust_brightness, adjust_contrast, to_float_rgb
    >>> rgb = adjust_contrast(adjust_brightness(to_float_rgb(bitmap), 120), 110)
"""

from imgmod.color.apply import apply_adjustments
from imgmod.color.reference import (
    adjust_brightness,
    adjust_contrast,
    adjust_saturation,
    apply_adjustments_reference,
    compute_luma,
    quantize,
    to_float_rgb,
)

__all__ = [
    "apply_adjustments",
    # Reference stages
    "apply_adjustments_reference",
    "adjust_brightness",
    "adjust_contrast",
    "adjust_saturation",
    "compute_luma",
    "quantize",
    "to_float_rgb",
]
