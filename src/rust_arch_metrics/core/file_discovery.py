"""File discovery and filtering for Rust analysis."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from ..config.defaults import DEFAULT_IGNORE_PATTERNS, RUST_FILE_EXTENSIONS


def _matches_exclude(name: str, pattern: str) -> bool:
    """Exclude pattern: substring of the name, or a glob over the name."""
    return pattern in name or fnmatch.fnmatch(name, pattern)


def _matches_ignore(name: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


def collect_rust_files(
    path: Path,
    exclude: str | None = None,
    ignore_patterns: Iterable[str] | None = None,
) -> list[Path]:
    """Find the Rust files to analyze.

    A file path is accepted as-is when it has a Rust extension. A directory
    is walked recursively; any file or directory whose name matches the
    exclude pattern or an ignore pattern is pruned together with everything
    below it.

    Args:
        path: File or directory to analyze
        exclude: Optional exclude pattern (substring or glob)
        ignore_patterns: Names to prune (defaults to DEFAULT_IGNORE_PATTERNS)

    Returns:
        Sorted list of Rust source files
    """
    patterns = (
        list(ignore_patterns)
        if ignore_patterns is not None
        else list(DEFAULT_IGNORE_PATTERNS)
    )

    if path.is_file():
        if path.suffix.lower() in RUST_FILE_EXTENSIONS:
            return [path]
        logger.debug(f"Not a Rust source file: {path}")
        return []

    if not path.is_dir():
        logger.debug(f"Path does not exist: {path}")
        return []

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(path):
        # Prune in place so os.walk does not descend into excluded directories
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not _matches_ignore(d, patterns)
            and not (exclude and _matches_exclude(d, exclude))
        )

        for filename in filenames:
            if Path(filename).suffix.lower() not in RUST_FILE_EXTENSIONS:
                continue
            if exclude and _matches_exclude(filename, exclude):
                continue
            if _matches_ignore(filename, patterns):
                continue
            files.append(Path(dirpath) / filename)

    logger.debug(f"Discovered {len(files)} Rust files under {path}")
    return sorted(files)
