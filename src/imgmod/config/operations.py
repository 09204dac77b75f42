"""Operation specifications for adjustment parameters.

This module defines the OperationSpec dataclass that specifies parameter
ranges, defaults, and the clamping policy for every adjustment knob.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Literal


@dataclass(frozen=True)
class OperationSpec:
    """Specification for an adjustment parameter.

    Attributes:
        name: Parameter name (e.g., "brightness", "quality")
        min_value: Minimum allowed value
        max_value: Maximum allowed value
        default: Default value when not specified
        neutral: Value that causes no change (identity)
        kind: "percent" for color knobs, "integer" for encoder quality
        description: Human-readable description
    """

    name: str
    min_value: float
    max_value: float
    default: float
    neutral: float
    kind: Literal["percent", "integer"] = "percent"
    description: str = ""

    def validate(self, value: float) -> float:
        """Validate and clamp value to allowed range.

        Integer parameters are rounded to the nearest whole number after
        clamping.

        :param value: Value to validate
        :returns: Clamped value within [min_value, max_value]
        :raises ValueError: If value is not a finite number
        """
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValueError(f"{self.name}: expected number, got {type(value).__name__}")
        value = float(value)
        if value != value:
            raise ValueError(f"{self.name}: NaN is not a valid value")

        clamped = max(self.min_value, min(self.max_value, value))
        if self.kind == "integer":
            return int(round(clamped))
        return clamped

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check if value is effectively neutral (no change).

        :param value: Value to check
        :param tolerance: Tolerance for floating point comparison
        :returns: True if value is within tolerance of neutral
        """
        return abs(value - self.neutral) < tolerance

    def in_range(self, value: float) -> bool:
        return self.min_value <= value <= self.max_value

    def __repr__(self) -> str:
        return (
            f"OperationSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default}, neutral={self.neutral}, "
            f"{self.kind})"
        )
