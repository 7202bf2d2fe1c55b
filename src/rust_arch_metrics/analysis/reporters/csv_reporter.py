"""CSV reporter for architectural metrics."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence

from ...core.models import METRIC_NAMES, AnalysisResult


def render_csv(
    results: Sequence[AnalysisResult], metrics: tuple[str, ...] = METRIC_NAMES
) -> str:
    """Render results as CSV with a ``struct_name,<metrics>`` header.

    Args:
        results: Analysis results
        metrics: Metric columns to include

    Returns:
        CSV text
    """
    columns = ["struct_name"] + [m for m in METRIC_NAMES if m in metrics]
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, lineterminator="\n")
    writer.writeheader()
    for result in results:
        writer.writerow(result.to_row(metrics))
    return buffer.getvalue()
