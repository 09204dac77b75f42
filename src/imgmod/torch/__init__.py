"""
GPU backend - PyTorch rendition of the adjustment pipeline.

Requires the ``gpu`` extra (``pip install imgmod[gpu]``).

Example:
    >>> from imgmod.torch import adjust_image_torch
    >>> result = adjust_image_torch(bitmap, TargetSize(1920, 1080), AdjustmentValues(contrast=120))
"""

from imgmod.torch.adjust import (
    adjust_image_torch,
    adjust_tensor,
    bitmap_to_tensor,
    default_device,
    resample_tensor,
    tensor_to_bitmap,
)

__all__ = [
    "adjust_image_torch",
    "adjust_tensor",
    "resample_tensor",
    "bitmap_to_tensor",
    "tensor_to_bitmap",
    "default_device",
]
