"""rust-arch-metrics - LCOM, CBO and WMC for Rust codebases."""

__version__ = "0.1.0"

from .core.exceptions import ArchMetricsError
from .core.pipeline import AnalysisRun, analyze_paths, analyze_sources, query_type

__all__ = [
    "ArchMetricsError",
    "AnalysisRun",
    "analyze_paths",
    "analyze_sources",
    "query_type",
    "__version__",
]
