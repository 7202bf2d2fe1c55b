"""Coupling metric: Coupling Between Objects (CBO).

CBO counts the distinct other locally defined types a type depends on,
through its field types and its methods' parameter and return types.
External (library) types never count, and neither does a type's reference
to itself (e.g. ``next: Option<Box<Node>>`` inside ``Node``).
"""

from __future__ import annotations

from collections.abc import Set

from ..core.models import TypeRecord


def coupled_types(record: TypeRecord, universe: Set[str]) -> set[str]:
    """Return the names of the local types this type is coupled to.

    Args:
        record: Resolved type record
        universe: Names of all locally defined types

    Returns:
        Distinct coupled type names, excluding the type itself
    """
    return {
        name
        for name in record.local_type_refs
        if name in universe and name != record.name
    }


def calculate_cbo(record: TypeRecord, universe: Set[str]) -> int:
    """Calculate CBO for a type.

    Counts distinct types, not occurrences: five fields of type ``Order``
    contribute 1.

    Args:
        record: Resolved type record
        universe: Names of all locally defined types

    Returns:
        Number of distinct coupled local types
    """
    return len(coupled_types(record, universe))
