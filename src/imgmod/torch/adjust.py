"""GPU-accelerated adjustment pipeline using PyTorch.

Mirrors the CPU pipeline step for step so both backends agree to within
one channel level:

- resample with ``F.interpolate`` (``align_corners=False`` uses the same
  pixel-center mapping and edge clamping as the CPU kernels), then round
- brightness -> contrast -> saturation, clamped after each step
- round half-up to uint8, alpha untouched
"""

from __future__ import annotations

import logging

import numpy as np
import torch
import torch.nn.functional as F

from imgmod.bitmap import Bitmap
from imgmod.config.values import AdjustmentValues, TargetSize
from imgmod.constants import (
    CHANNEL_MAX,
    CHANNEL_MID,
    DEFAULT_RESAMPLE_POLICY,
    LUMA_B,
    LUMA_G,
    LUMA_R,
    RESAMPLE_POLICIES,
)

logger = logging.getLogger(__name__)

# F.interpolate mode per resample policy
_INTERPOLATE_MODES = {"bilinear": "bilinear", "nearest": "nearest-exact"}


def default_device() -> torch.device:
    return torch.device("cuda" if torch.cuda.is_available() else "cpu")


def bitmap_to_tensor(bitmap: Bitmap, device: torch.device | str | None = None) -> torch.Tensor:
    """Convert a Bitmap to a float32 tensor [1, 4, H, W] on device."""
    device = default_device() if device is None else torch.device(device)
    t = torch.from_numpy(np.ascontiguousarray(bitmap.pixels)).to(device)
    return t.permute(2, 0, 1).unsqueeze(0).to(torch.float32)


def tensor_to_bitmap(t: torch.Tensor) -> Bitmap:
    """Convert a [1, 4, H, W] tensor on the 0-255 scale to a Bitmap."""
    rounded = torch.floor(t.clamp(0.0, CHANNEL_MAX) + 0.5).to(torch.uint8)
    pixels = rounded.squeeze(0).permute(1, 2, 0).contiguous().cpu().numpy()
    return Bitmap(width=pixels.shape[1], height=pixels.shape[0], pixels=pixels)


def resample_tensor(
    t: torch.Tensor, size: TargetSize, policy: str = DEFAULT_RESAMPLE_POLICY
) -> torch.Tensor:
    """Resample a [1, 4, H, W] tensor and round to whole channel levels.

    :raises ValueError: If size is invalid or policy is unknown
    """
    size.validate()
    if policy not in RESAMPLE_POLICIES:
        raise ValueError(f"Unknown resample policy '{policy}'. Available: {', '.join(RESAMPLE_POLICIES)}")
    if (t.shape[3], t.shape[2]) == size.as_tuple():
        return t.clone()

    mode = _INTERPOLATE_MODES[policy]
    kwargs = {"align_corners": False} if mode == "bilinear" else {}
    out = F.interpolate(t, size=(size.height, size.width), mode=mode, **kwargs)
    return torch.floor(out.clamp(0.0, CHANNEL_MAX) + 0.5)


def adjust_tensor(t: torch.Tensor, values: AdjustmentValues) -> torch.Tensor:
    """Apply brightness -> contrast -> saturation to a [1, 4, H, W] tensor.

    :param t: Tensor on the 0-255 scale (not modified)
    :param values: Adjustment values, clamped before use
    :returns: New tensor (unrounded) with alpha copied
    """
    values = values.clamp()
    rgb = t[:, :3].clone()

    if values.brightness_factor != 1.0:
        rgb = (rgb * values.brightness_factor).clamp_(0.0, CHANNEL_MAX)

    if values.contrast_factor != 1.0:
        rgb = ((rgb - CHANNEL_MID) * values.contrast_factor + CHANNEL_MID).clamp_(0.0, CHANNEL_MAX)

    if values.saturation_factor != 1.0:
        luma = LUMA_R * rgb[:, 0:1] + LUMA_G * rgb[:, 1:2] + LUMA_B * rgb[:, 2:3]
        rgb = (luma + (rgb - luma) * values.saturation_factor).clamp_(0.0, CHANNEL_MAX)

    return torch.cat([rgb, t[:, 3:4]], dim=1)


@torch.no_grad()
def adjust_image_torch(
    source: Bitmap,
    size: TargetSize | None = None,
    values: AdjustmentValues | None = None,
    *,
    policy: str = DEFAULT_RESAMPLE_POLICY,
    device: torch.device | str | None = None,
) -> Bitmap:
    """GPU counterpart of :func:`imgmod.pipeline.adjust_image`.

    :param source: Decoded source image (not modified)
    :param size: Target dimensions (default: native size)
    :param values: Adjustment values (default: neutral)
    :param policy: Resample policy, "bilinear" or "nearest"
    :param device: Torch device (default: CUDA if available, else CPU)
    :returns: New Bitmap of exactly size.width x size.height
    :raises ValueError: If size is not positive or a value is not a number
    """
    size = (TargetSize.of(source) if size is None else size).validate()
    values = AdjustmentValues() if values is None else values

    t = bitmap_to_tensor(source, device)
    t = resample_tensor(t, size, policy)
    t = adjust_tensor(t, values)
    result = tensor_to_bitmap(t)

    logger.debug(
        "[torch] Rendered %dx%d -> %dx%d on %s",
        source.width,
        source.height,
        result.width,
        result.height,
        t.device,
    )
    return result
