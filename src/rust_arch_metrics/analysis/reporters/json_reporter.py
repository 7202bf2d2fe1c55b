"""JSON reporter for architectural metrics."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import orjson

from ...core.models import METRIC_NAMES, AnalysisResult


def dumps_json(data: Any) -> str:
    """Serialize to indented JSON text."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")


def render_json(
    results: Sequence[AnalysisResult], metrics: tuple[str, ...] = METRIC_NAMES
) -> str:
    """Render results as a JSON array of ``{"struct_name", metric...}`` objects.

    Args:
        results: Analysis results
        metrics: Metrics to include in each object

    Returns:
        JSON string
    """
    return dumps_json([result.to_row(metrics) for result in results])
