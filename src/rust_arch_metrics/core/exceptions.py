"""Typed exception hierarchy for rust-arch-metrics.

Hierarchy
---------
ArchMetricsError (base)
├── ParsingError             – a source file is not valid Rust syntax
├── InvariantViolationError  – an internally inconsistent record (a defect)
├── NoAnalyzableFilesError   – the run found nothing to analyze
└── ConfigError              – configuration / validation errors

Only ``NoAnalyzableFilesError`` and ``ConfigError`` are expected to reach the
CLI. ``ParsingError`` is caught by the pipeline and recorded as a skipped-file
warning; ``InvariantViolationError`` means a bug and is never caught.
"""

from typing import Any


class ArchMetricsError(Exception):
    """Base exception for rust-arch-metrics."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class ParsingError(ArchMetricsError):
    """Source text does not conform to the Rust grammar."""

    pass


class InvariantViolationError(ArchMetricsError):
    """A record violates a model invariant (e.g. complexity below 1)."""

    pass


class NoAnalyzableFilesError(ArchMetricsError):
    """No Rust source files were found or given."""

    pass


class ConfigError(ArchMetricsError):
    """Configuration / validation errors."""

    pass
