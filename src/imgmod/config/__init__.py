"""Configuration module for imgmod adjustments.

This module provides standardized parameter specifications, value
dataclasses, and a preset library.

Usage:
    from imgmod.config import CONFIG
    CONFIG.brightness.neutral  # 100.0
    CONFIG.quality.default     # 90
"""

from imgmod.config.adjust import CONFIG, AdjustConfig
from imgmod.config.operations import OperationSpec
from imgmod.config.presets import (
    ARCHIVE,
    BRIGHTEN,
    DARKEN,
    FADED,
    GRAYSCALE,
    HIGH_CONTRAST_MONO,
    MUTED,
    NEUTRAL,
    PRESETS,
    PUNCHY,
    VIVID,
    WEB,
    get_preset,
    load_values_json,
    read_values_dict,
    save_values_json,
    values_from_dict,
    values_to_dict,
)
from imgmod.config.values import AdjustmentValues, TargetSize

__all__ = [
    # Specs
    "CONFIG",
    "AdjustConfig",
    "OperationSpec",
    # Values
    "AdjustmentValues",
    "TargetSize",
    # Presets
    "PRESETS",
    "NEUTRAL",
    "BRIGHTEN",
    "DARKEN",
    "VIVID",
    "MUTED",
    "PUNCHY",
    "FADED",
    "GRAYSCALE",
    "HIGH_CONTRAST_MONO",
    "WEB",
    "ARCHIVE",
    "get_preset",
    "values_from_dict",
    "values_to_dict",
    "load_values_json",
    "read_values_dict",
    "save_values_json",
]
