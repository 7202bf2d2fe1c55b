"""Configuration for rust-arch-metrics."""

from .settings import AnalysisConfig
from .thresholds import MetricThresholds

__all__ = ["AnalysisConfig", "MetricThresholds"]
