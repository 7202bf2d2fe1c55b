"""Complexity metric: Weighted Methods per Class (WMC)."""

from __future__ import annotations

from ..core.exceptions import InvariantViolationError
from ..core.models import TypeRecord


def calculate_wmc(record: TypeRecord) -> int:
    """Sum cyclomatic complexity over a type's methods.

    A type without methods has WMC 0; every method contributes at least 1.

    Raises:
        InvariantViolationError: If a method's complexity is below 1
    """
    total = 0
    for method in record.methods.values():
        if method.cyclomatic_complexity < 1:
            raise InvariantViolationError(
                f"{record.name}::{method.name} has cyclomatic complexity "
                f"{method.cyclomatic_complexity}",
                context={"type_name": record.name, "method_name": method.name},
            )
        total += method.cyclomatic_complexity
    return total
