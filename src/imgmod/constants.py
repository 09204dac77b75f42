"""Shared numeric constants for imgmod."""

from __future__ import annotations

# =============================================================================
# Channel range (8-bit straight RGBA)
# =============================================================================

CHANNEL_MIN = 0.0
CHANNEL_MAX = 255.0
CHANNEL_MID = 127.5
NUM_CHANNELS = 4

# =============================================================================
# Luma weights (Rec. 601)
# =============================================================================

LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114

# =============================================================================
# Processing
# =============================================================================

# Rows processed between cancellation checks
DEFAULT_BAND_ROWS = 64
MIN_BAND_ROWS = 1

RESAMPLE_POLICIES = ("bilinear", "nearest")
DEFAULT_RESAMPLE_POLICY = "bilinear"

# =============================================================================
# Export
# =============================================================================

DEFAULT_QUALITY = 90
DEFAULT_EXPORT_NAME = "processed-image.jpg"
EXPORT_MIME_TYPE = "image/jpeg"
