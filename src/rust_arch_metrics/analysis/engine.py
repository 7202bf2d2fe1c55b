"""Metrics engine: turn resolved type records into analysis results."""

from __future__ import annotations

import math
from collections.abc import Set

from loguru import logger

from ..core.exceptions import InvariantViolationError
from ..core.models import AnalysisModel, AnalysisResult, TypeRecord
from .cohesion import calculate_lcom
from .complexity import calculate_wmc
from .coupling import calculate_cbo

SORT_KEYS = ("name", "lcom", "cbo", "wmc")


def analyze_type(record: TypeRecord, universe: Set[str]) -> AnalysisResult:
    """Compute LCOM, CBO and WMC for one type.

    Args:
        record: Resolved type record
        universe: Names of all locally defined types

    Returns:
        Immutable AnalysisResult

    Raises:
        InvariantViolationError: If the record is internally inconsistent
    """
    lcom = calculate_lcom(record)
    if not math.isfinite(lcom):
        raise InvariantViolationError(
            f"LCOM for {record.name} is not finite", context={"type_name": record.name}
        )

    return AnalysisResult(
        type_name=record.name,
        lcom=lcom,
        cbo=calculate_cbo(record, universe),
        wmc=calculate_wmc(record),
    )


def analyze_model(model: AnalysisModel) -> list[AnalysisResult]:
    """Analyze every type in the model, in discovery order.

    Each result depends only on its own record and the universe.
    """
    universe = model.universe
    results = [analyze_type(record, universe) for record in model.types.values()]
    logger.debug(f"Computed metrics for {len(results)} types")
    return results


def sort_results(results: list[AnalysisResult], key: str) -> list[AnalysisResult]:
    """Sort results by name (ascending) or by a metric (descending).

    Ties on a metric are broken by type name so the order is deterministic.

    Raises:
        ValueError: If ``key`` is not one of SORT_KEYS
    """
    if key == "name":
        return sorted(results, key=lambda r: r.type_name)
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key} (expected one of {', '.join(SORT_KEYS)})")
    return sorted(results, key=lambda r: (-getattr(r, key), r.type_name))
