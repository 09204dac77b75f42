"""
imgmod - Single-image adjustment and export

Resize a decoded image and adjust its brightness, contrast and saturation,
then export it as JPEG at a chosen quality.

Features:
- Bilinear (or nearest) resampling to any target size, exact at native size
- Brightness -> contrast -> saturation in a fixed order, clamped per step
- Numba kernels processing rows in bands with cooperative cancellation
- Edit sessions that always re-render from the original, last request wins
- Presets and JSON parameter files
- Optional PyTorch backend (imgmod.torch)

Example - Pure function:
    >>> from imgmod import AdjustmentValues, TargetSize, adjust_image, load_bitmap
    >>>
    >>> source = load_bitmap("photo.png")
    >>> result = adjust_image(
    ...     source,
    ...     TargetSize(800, 600),
    ...     AdjustmentValues(brightness=120, contrast=110, saturation=90),
    ... )

Example - Edit session:
    >>> from imgmod import EditSession
    >>>
    >>> session = EditSession.from_file("photo.png")
    >>> session.set_values(saturation=0, quality=75)
    >>> session.apply()
    >>> session.export().save("downloads")   # downloads/processed-image.jpg

Example - Fluent pipeline:
    >>> from imgmod import Pipeline
    >>> result = Pipeline().brightness(110).contrast(120).resize(640, 480)(source)
"""

__version__ = "0.1.0"

from imgmod.bitmap import Bitmap

# Codec adapters
from imgmod.codec import (
    ExportResult,
    decode_bitmap,
    encode_jpeg,
    export_bitmap,
    load_bitmap,
    save_bitmap,
)

# Color stage
from imgmod.color import apply_adjustments, apply_adjustments_reference, compute_luma

# Config values and presets
from imgmod.config import (
    CONFIG,
    PRESETS,
    AdjustmentValues,
    OperationSpec,
    TargetSize,
    get_preset,
    load_values_json,
    save_values_json,
    values_from_dict,
    values_to_dict,
)

# Pipeline
from imgmod.pipeline import Pipeline, adjust_image
from imgmod.progress import RenderCancelled

# Resample stage
from imgmod.resample import resample

# Session
from imgmod.session import EditSession, RenderTicket

__all__ = [
    # Version
    "__version__",
    # Data structures
    "Bitmap",
    "AdjustmentValues",
    "TargetSize",
    # Config
    "CONFIG",
    "OperationSpec",
    "PRESETS",
    "get_preset",
    "values_from_dict",
    "values_to_dict",
    "load_values_json",
    "save_values_json",
    # Pipeline
    "adjust_image",
    "Pipeline",
    "resample",
    "apply_adjustments",
    "apply_adjustments_reference",
    "compute_luma",
    "RenderCancelled",
    # Session
    "EditSession",
    "RenderTicket",
    # Codec
    "ExportResult",
    "decode_bitmap",
    "load_bitmap",
    "encode_jpeg",
    "export_bitmap",
    "save_bitmap",
]
