"""Source parsers for rust-arch-metrics."""

from .rust import RustExtractor

__all__ = ["RustExtractor"]
