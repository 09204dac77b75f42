"""Preset library for adjustment values.

Provides pre-configured AdjustmentValues for common looks, with support
for loading from dict and JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from imgmod.config.values import AdjustmentValues

logger = logging.getLogger(__name__)

# ============================================================================
# Presets
# ============================================================================

NEUTRAL = AdjustmentValues()

BRIGHTEN = AdjustmentValues(brightness=115)

DARKEN = AdjustmentValues(brightness=85)

VIVID = AdjustmentValues(contrast=110, saturation=135)

MUTED = AdjustmentValues(contrast=95, saturation=70)

PUNCHY = AdjustmentValues(brightness=105, contrast=125, saturation=115)

FADED = AdjustmentValues(brightness=110, contrast=75, saturation=80)

GRAYSCALE = AdjustmentValues(saturation=0)

HIGH_CONTRAST_MONO = AdjustmentValues(contrast=140, saturation=0)

# Encoder-only presets (no pixel change)
WEB = AdjustmentValues(quality=75)

ARCHIVE = AdjustmentValues(quality=100)

PRESETS: dict[str, AdjustmentValues] = {
    "neutral": NEUTRAL,
    "brighten": BRIGHTEN,
    "darken": DARKEN,
    "vivid": VIVID,
    "muted": MUTED,
    "punchy": PUNCHY,
    "faded": FADED,
    "grayscale": GRAYSCALE,
    "high_contrast_mono": HIGH_CONTRAST_MONO,
    "web": WEB,
    "archive": ARCHIVE,
}


def get_preset(name: str) -> AdjustmentValues:
    """Get an adjustment preset by name.

    :param name: Preset name (case-insensitive, '-' and '_' interchangeable)
    :returns: AdjustmentValues preset
    :raises KeyError: If preset not found
    """
    key = name.lower().replace("-", "_")
    if key not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return PRESETS[key]


# ============================================================================
# Dict/JSON Loading
# ============================================================================

VALUE_FIELDS = ("brightness", "contrast", "saturation", "quality")


def values_from_dict(d: dict) -> AdjustmentValues:
    """Create AdjustmentValues from dictionary.

    Unknown keys are ignored. A "preset" key selects a base preset that
    the explicit fields then override.

    :param d: Dictionary with adjustment parameters
    :returns: AdjustmentValues instance

    Example:
        >>> values = values_from_dict({"brightness": 120, "quality": 80})
        >>> values = values_from_dict({"preset": "vivid", "quality": 70})
    """
    base = get_preset(d["preset"]) if "preset" in d else NEUTRAL
    kwargs = {
        "brightness": base.brightness,
        "contrast": base.contrast,
        "saturation": base.saturation,
        "quality": base.quality,
    }
    ignored = sorted(k for k in d if k not in VALUE_FIELDS and k != "preset")
    if ignored:
        logger.debug("[presets] Ignoring unknown keys: %s", ", ".join(ignored))
    kwargs.update({k: v for k, v in d.items() if k in VALUE_FIELDS})
    return AdjustmentValues(**kwargs)


def read_values_dict(path: str | Path) -> dict:
    """Read a JSON object of adjustment parameters without interpreting it.

    :param path: Path to JSON file
    :returns: Parsed dictionary
    :raises ValueError: If the file does not hold a JSON object
    """
    with open(path) as f:
        d = json.load(f)
    if not isinstance(d, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(d).__name__}")
    return d


def load_values_json(path: str | Path) -> AdjustmentValues:
    """Load AdjustmentValues from JSON file.

    :param path: Path to JSON file
    :returns: AdjustmentValues instance
    """
    return values_from_dict(read_values_dict(path))


# ============================================================================
# Saving Functions
# ============================================================================


def values_to_dict(values: AdjustmentValues) -> dict:
    """Convert AdjustmentValues to dictionary.

    :param values: AdjustmentValues instance
    :returns: Dictionary representation
    """
    return {
        "brightness": values.brightness,
        "contrast": values.contrast,
        "saturation": values.saturation,
        "quality": values.quality,
    }


def save_values_json(values: AdjustmentValues, path: str | Path) -> None:
    """Save AdjustmentValues to JSON file.

    :param values: AdjustmentValues instance
    :param path: Output path
    """
    with open(path, "w") as f:
        json.dump(values_to_dict(values), f, indent=2)
