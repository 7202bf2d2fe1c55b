"""Command-line interface for rust-arch-metrics."""
