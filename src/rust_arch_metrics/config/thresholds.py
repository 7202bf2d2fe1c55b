"""Threshold configuration for architectural metrics."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from ..core.exceptions import ConfigError


@dataclass
class MetricThresholds:
    """Warning levels used by reporters to flag problem types.

    A type at or above any threshold is a god-class / low-cohesion candidate.
    """

    lcom_warning: float = 0.8  # Low cohesion
    cbo_warning: int = 5  # Coupled to many local types
    wmc_warning: int = 20  # Too much logic in one type

    def __post_init__(self) -> None:
        for threshold in fields(self):
            value = getattr(self, threshold.name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(
                    f"{threshold.name} must be a number, got {value!r}",
                    context={"threshold": threshold.name, "value": value},
                )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetricThresholds:
        """Create thresholds from dictionary.

        Args:
            data: Threshold dictionary (missing keys keep defaults)

        Returns:
            MetricThresholds instance

        Raises:
            ConfigError: If a threshold is not a number
        """
        return cls(**data) if data else cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "lcom_warning": self.lcom_warning,
            "cbo_warning": self.cbo_warning,
            "wmc_warning": self.wmc_warning,
        }

    def exceeded(self, metric: str, value: float) -> bool:
        """Check whether a metric value reaches its warning level.

        Args:
            metric: One of "lcom", "cbo", "wmc"
            value: Metric value

        Returns:
            True if the value is at or above the threshold
        """
        return value >= getattr(self, f"{metric}_warning")
