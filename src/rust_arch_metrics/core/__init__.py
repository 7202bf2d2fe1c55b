"""Core pipeline: data model, aggregation, file discovery and orchestration."""

from .exceptions import (
    ArchMetricsError,
    ConfigError,
    InvariantViolationError,
    NoAnalyzableFilesError,
    ParsingError,
)
from .models import AnalysisResult, MethodRecord, SourceFile, TypeRecord

__all__ = [
    "ArchMetricsError",
    "ConfigError",
    "InvariantViolationError",
    "NoAnalyzableFilesError",
    "ParsingError",
    "AnalysisResult",
    "MethodRecord",
    "SourceFile",
    "TypeRecord",
]
