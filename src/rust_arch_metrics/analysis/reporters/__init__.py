"""Analysis reporters for outputting metrics in various formats."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum

from ...config.thresholds import MetricThresholds
from ...core.models import METRIC_NAMES, AnalysisResult
from .console import ConsoleReporter, render_table
from .csv_reporter import render_csv
from .json_reporter import dumps_json, render_json


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"

    @classmethod
    def parse(cls, value: str) -> OutputFormat:
        """Parse a format name case-insensitively.

        Raises:
            ValueError: On an unknown format name
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown format: {value}") from None


def parse_metrics(value: str) -> tuple[str, ...]:
    """Parse a comma-separated metric selection (``"all"`` selects every metric).

    Raises:
        ValueError: On an unknown metric name or an empty selection
    """
    names = [part.strip().lower() for part in value.split(",") if part.strip()]
    if not names:
        raise ValueError("No metrics selected")
    if "all" in names:
        return METRIC_NAMES

    unknown = [name for name in names if name not in METRIC_NAMES]
    if unknown:
        raise ValueError(
            f"Unknown metric(s): {', '.join(unknown)} "
            f"(expected {', '.join(METRIC_NAMES)} or all)"
        )
    return tuple(m for m in METRIC_NAMES if m in names)


def generate_report(
    results: Sequence[AnalysisResult],
    output_format: OutputFormat,
    metrics: tuple[str, ...] = METRIC_NAMES,
    thresholds: MetricThresholds | None = None,
) -> str:
    """Render results in the requested format."""
    if output_format is OutputFormat.JSON:
        return render_json(results, metrics)
    if output_format is OutputFormat.CSV:
        return render_csv(results, metrics)
    return render_table(results, metrics, thresholds)


__all__ = [
    "ConsoleReporter",
    "OutputFormat",
    "dumps_json",
    "generate_report",
    "parse_metrics",
    "render_csv",
    "render_json",
    "render_table",
]
