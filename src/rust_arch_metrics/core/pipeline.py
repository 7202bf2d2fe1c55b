"""Analysis pipeline: extract per file, aggregate, then measure.

The pipeline is fork-join. Extraction of each file is independent and runs
on a thread pool with one extractor per worker thread; aggregation waits for
every extraction to finish because locality of type names needs the full
universe; metrics are then computed per type.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from ..analysis.engine import analyze_model
from ..config.settings import AnalysisConfig
from ..parsers.rust import RustExtractor
from .aggregator import aggregate
from .exceptions import NoAnalyzableFilesError, ParsingError
from .models import (
    AnalysisModel,
    AnalysisResult,
    FileExtraction,
    SkippedFile,
    SourceFile,
    TypeRecord,
)

_thread_state = threading.local()


@dataclass
class AnalysisRun:
    """Outcome of one pipeline run.

    Attributes:
        results: One AnalysisResult per type, in discovery order
        model: The resolved model the results were computed from
        skipped_files: Files left out because they could not be read or parsed
        files_analyzed: Number of files that were extracted successfully
    """

    results: list[AnalysisResult] = field(default_factory=list)
    model: AnalysisModel = field(default_factory=AnalysisModel)
    skipped_files: list[SkippedFile] = field(default_factory=list)
    files_analyzed: int = 0

    @property
    def warnings(self) -> list[str]:
        """Skipped-file warnings followed by merge diagnostics."""
        messages = [skipped.message for skipped in self.skipped_files]
        messages.extend(c.message for c in self.model.type_collisions)
        messages.extend(c.message for c in self.model.method_collisions)
        return messages

    def find_type(self, name: str) -> TypeRecord | None:
        """Debug query: the resolved record for ``name``, or None if absent."""
        return query_type(self.model, name)


def query_type(model: AnalysisModel, name: str) -> TypeRecord | None:
    """Look up a type's full record; None signals "not found"."""
    return model.types.get(name)


def _get_extractor(count_boolean_operators: bool) -> RustExtractor:
    """Return this thread's extractor, creating it on first use."""
    extractor = getattr(_thread_state, "extractor", None)
    if (
        extractor is None
        or extractor.count_boolean_operators != count_boolean_operators
    ):
        extractor = RustExtractor(count_boolean_operators=count_boolean_operators)
        _thread_state.extractor = extractor
    return extractor


def _extract_source(
    source: SourceFile, count_boolean_operators: bool
) -> FileExtraction | SkippedFile:
    extractor = _get_extractor(count_boolean_operators)
    try:
        return extractor.extract(source.text, source.path)
    except ParsingError as e:
        logger.warning(f"Failed to parse {source.path}: {e}")
        return SkippedFile(file_path=str(source.path), reason=str(e))


def extract_sources(
    sources: Sequence[SourceFile], config: AnalysisConfig
) -> tuple[list[FileExtraction], list[SkippedFile]]:
    """Extract every source file, in parallel when more than one worker is allowed.

    Results keep the input order regardless of completion order.

    Returns:
        Tuple of (successful extractions, skipped files)
    """
    max_workers = min(config.resolve_max_workers(), len(sources))
    count_bool = config.count_boolean_operators

    if max_workers <= 1:
        outcomes = [_extract_source(source, count_bool) for source in sources]
    else:
        with ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="extract"
        ) as executor:
            outcomes = list(
                executor.map(lambda s: _extract_source(s, count_bool), sources)
            )
        logger.debug(
            f"Extracted {len(sources)} files with {max_workers} worker threads"
        )

    extractions = [o for o in outcomes if isinstance(o, FileExtraction)]
    skipped = [o for o in outcomes if isinstance(o, SkippedFile)]
    return extractions, skipped


def analyze_sources(
    sources: Iterable[SourceFile], config: AnalysisConfig | None = None
) -> AnalysisRun:
    """Run the full pipeline over in-memory sources.

    Args:
        sources: (path, text) pairs, already filtered by any exclude pattern
        config: Analysis configuration (defaults if None)

    Returns:
        AnalysisRun with results, resolved model and warnings

    Raises:
        NoAnalyzableFilesError: If no sources are given
    """
    config = config or AnalysisConfig()
    sources = list(sources)
    if not sources:
        raise NoAnalyzableFilesError("No Rust files to analyze")

    extractions, skipped = extract_sources(sources, config)
    model = aggregate(extractions, count_body_references=config.count_body_references)
    results = analyze_model(model)

    return AnalysisRun(
        results=results,
        model=model,
        skipped_files=skipped,
        files_analyzed=len(extractions),
    )


def read_sources(paths: Iterable[Path]) -> tuple[list[SourceFile], list[SkippedFile]]:
    """Read source files as UTF-8; unreadable files become skipped-file warnings."""
    sources: list[SourceFile] = []
    skipped: list[SkippedFile] = []

    for path in paths:
        try:
            sources.append(SourceFile(path=path, text=path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            skipped.append(SkippedFile(file_path=str(path), reason=f"unreadable: {e}"))

    return sources, skipped


def analyze_paths(
    paths: Iterable[Path], config: AnalysisConfig | None = None
) -> AnalysisRun:
    """Read files from disk and run the pipeline over them.

    Raises:
        NoAnalyzableFilesError: If no paths are given or none can be read
    """
    paths = list(paths)
    if not paths:
        raise NoAnalyzableFilesError("No Rust files to analyze")

    sources, unreadable = read_sources(paths)
    if not sources:
        raise NoAnalyzableFilesError(
            "None of the Rust files could be read",
            context={"skipped_files": [s.file_path for s in unreadable]},
        )

    run = analyze_sources(sources, config)
    run.skipped_files = unreadable + run.skipped_files
    return run
