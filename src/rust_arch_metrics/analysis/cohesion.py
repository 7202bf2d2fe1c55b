"""Cohesion metric: Henderson-Sellers Lack of Cohesion in Methods.

LCOM measures how little a type's methods share its fields. For a type with
``m`` methods and ``f`` fields, let ``sum_access`` be the number of
(method, field) pairs where the method accesses the field. Then::

    LCOM = (m - sum_access / f) / (m - 1)

clamped to [0, 1]. 0 means every method touches every field; 1 means each
field is used by at most one method on average.

Edge cases:
    - m <= 1: 0.0 (a single method cannot lack cohesion with itself)
    - f == 0: 0.0 (no fields to disagree over)

Only accesses to declared fields are counted. Field accesses are detected
syntactically, so a method may name fields the type does not declare; those
do not enter ``sum_access``.
"""

from __future__ import annotations

from ..core.models import TypeRecord


def count_field_accesses(record: TypeRecord) -> int:
    """Count (method, declared field) access pairs.

    Args:
        record: Resolved type record

    Returns:
        Number of pairs where a method accesses one of the type's fields
    """
    declared = set(record.fields)
    return sum(
        len(method.accessed_fields & declared) for method in record.methods.values()
    )


def calculate_lcom(record: TypeRecord) -> float:
    """Calculate Henderson-Sellers LCOM for a type.

    Args:
        record: Resolved type record

    Returns:
        LCOM value between 0.0 and 1.0 (higher = less cohesive)

    Example:
        Point { x, y } with ``new`` (no field access) and ``distance``
        (accesses x and y): m=2, f=2, sum_access=2 -> (2 - 1) / 1 = 1.0
    """
    method_count = record.method_count
    field_count = len(record.fields)

    if method_count <= 1 or field_count == 0:
        return 0.0

    avg_methods_per_field = count_field_accesses(record) / field_count
    lcom = (method_count - avg_methods_per_field) / (method_count - 1)

    return min(1.0, max(0.0, lcom))
