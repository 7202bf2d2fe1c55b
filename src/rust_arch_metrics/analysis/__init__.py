"""Architectural metrics over resolved type records.

Key Components:
    - calculate_lcom: Henderson-Sellers lack of cohesion (0.0 - 1.0)
    - calculate_cbo: distinct local types a type is coupled to
    - calculate_wmc: sum of method cyclomatic complexity
    - analyze_type / analyze_model: produce AnalysisResult objects

Example:
    model = aggregate(extractions)
    for result in analyze_model(model):
        print(result.type_name, result.lcom, result.cbo, result.wmc)
"""

from .cohesion import calculate_lcom, count_field_accesses
from .complexity import calculate_wmc
from .coupling import calculate_cbo, coupled_types
from .engine import SORT_KEYS, analyze_model, analyze_type, sort_results

__all__ = [
    "SORT_KEYS",
    "analyze_model",
    "analyze_type",
    "calculate_cbo",
    "calculate_lcom",
    "calculate_wmc",
    "count_field_accesses",
    "coupled_types",
    "sort_results",
]
