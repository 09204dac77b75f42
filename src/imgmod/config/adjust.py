"""Adjustment parameter configuration.

This module defines the standardized parameter specifications for the
four user-facing knobs, shared by the CPU and GPU pipelines.
"""

from __future__ import annotations

from dataclasses import dataclass

from imgmod.config.operations import OperationSpec
from imgmod.constants import DEFAULT_QUALITY


@dataclass(frozen=True)
class AdjustConfig:
    """Configuration for all adjustment parameters.

    Color knobs are percentages where 100 means unchanged. Quality is the
    lossy encoder fidelity and does not affect the pixel pipeline.
    """

    brightness: OperationSpec = OperationSpec(
        name="brightness",
        min_value=0.0,
        max_value=200.0,
        default=100.0,
        neutral=100.0,
        description="Brightness percent: 0=black, 100=no change, 200=double",
    )

    contrast: OperationSpec = OperationSpec(
        name="contrast",
        min_value=0.0,
        max_value=200.0,
        default=100.0,
        neutral=100.0,
        description="Contrast percent around mid-gray: 0=flat gray, 100=no change",
    )

    saturation: OperationSpec = OperationSpec(
        name="saturation",
        min_value=0.0,
        max_value=200.0,
        default=100.0,
        neutral=100.0,
        description="Saturation percent: 0=grayscale, 100=no change",
    )

    quality: OperationSpec = OperationSpec(
        name="quality",
        min_value=1,
        max_value=100,
        default=DEFAULT_QUALITY,
        neutral=100,
        kind="integer",
        description="Lossy encoder quality: 1=smallest file, 100=best fidelity",
    )

    def get_spec(self, name: str) -> OperationSpec:
        """Get parameter spec by name.

        :param name: Parameter name
        :return: OperationSpec for the parameter
        :raises AttributeError: If parameter not found
        """
        return getattr(self, name)

    def get_all_specs(self) -> dict[str, OperationSpec]:
        """Get all parameter specs as a dictionary.

        :return: Dictionary mapping parameter names to specs
        """
        return {
            "brightness": self.brightness,
            "contrast": self.contrast,
            "saturation": self.saturation,
            "quality": self.quality,
        }


# Singleton instance for use throughout the codebase
CONFIG = AdjustConfig()
