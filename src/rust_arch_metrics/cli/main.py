"""Command-line entry point for rust-arch-metrics."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger

from .. import __version__
from ..analysis.engine import SORT_KEYS, sort_results
from ..analysis.reporters import (
    ConsoleReporter,
    OutputFormat,
    dumps_json,
    generate_report,
    parse_metrics,
)
from ..config.defaults import DEFAULT_CONFIG_FILENAME
from ..config.settings import AnalysisConfig
from ..core.exceptions import ConfigError, NoAnalyzableFilesError
from ..core.file_discovery import collect_rust_files
from ..core.pipeline import AnalysisRun, analyze_paths
from .output import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    name="rust-arch-metrics",
    help="📐 Measure LCOM, CBO and WMC for the types of a Rust codebase",
    add_completion=False,
)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route loguru output to stderr at the requested level."""
    level = "ERROR" if quiet else "DEBUG" if verbose else "WARNING"
    logger.remove()
    logger.add(sys.stderr, level=level)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rust-arch-metrics {__version__}")
        raise typer.Exit()


def _load_config(path: Path, config_file: Path | None) -> AnalysisConfig:
    """Load the explicit config file, or the default one next to the input."""
    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError(f"Config file not found: {config_file}")
        return AnalysisConfig.load(config_file)

    base = path if path.is_dir() else path.parent
    return AnalysisConfig.load(base / DEFAULT_CONFIG_FILENAME)


def _write_or_print(content: str, output: Path | None) -> None:
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        print_success(f"Report written to {output}")
    else:
        typer.echo(content)


def _report_warnings(run: AnalysisRun, verbose: bool) -> None:
    """Show all diagnostics when verbose, otherwise only the skipped-file count."""
    if verbose:
        ConsoleReporter(console=err_console).print_warnings(run.warnings)
    elif run.skipped_files:
        print_warning(
            f"{len(run.skipped_files)} file(s) skipped (use --verbose for details)"
        )


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Path to the Rust project or file to analyze",
        metavar="PATH",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table, json, csv",
        metavar="FORMAT",
    ),
    metrics: str = typer.Option(
        "all",
        "--metrics",
        "-m",
        help='Comma-separated metrics to calculate: lcom,cbo,wmc or "all"',
        metavar="METRICS",
    ),
    exclude: str | None = typer.Option(
        None,
        "--exclude",
        help="Skip files and directories whose name contains or matches PATTERN",
        metavar="PATTERN",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: stdout)",
        metavar="FILE",
    ),
    sort: str | None = typer.Option(
        None,
        "--sort",
        help="Sort by name, lcom, cbo or wmc (default: discovery order)",
    ),
    debug_type: str | None = typer.Option(
        None,
        "--debug-type",
        help="Dump the full extracted record of one type as JSON",
        metavar="NAME",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        help=f"YAML configuration file (default: PATH/{DEFAULT_CONFIG_FILENAME})",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        min=1,
        help="Number of extraction worker threads",
    ),
    count_boolean_ops: bool = typer.Option(
        False,
        "--count-boolean-ops",
        help="Count && and || as branch points in cyclomatic complexity",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Debug logging and full diagnostics"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """📐 Measure architectural metrics of Rust types.

    For every struct, enum and union the tool reports LCOM (lack of
    cohesion), CBO (coupling to other local types) and WMC (summed
    cyclomatic complexity of its methods).

    [bold cyan]Examples:[/bold cyan]

    [green]Analyze a crate:[/green]
        $ rust-arch-metrics src/

    [green]JSON report, sorted by complexity:[/green]
        $ rust-arch-metrics src/ --format json --sort wmc -o metrics.json

    [green]Inspect what was extracted for one type:[/green]
        $ rust-arch-metrics src/ --debug-type Order
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        fmt = OutputFormat.parse(output_format)
        selected_metrics = parse_metrics(metrics)
        if sort is not None and sort not in SORT_KEYS:
            raise ValueError(
                f"Unknown sort key: {sort} (expected one of {', '.join(SORT_KEYS)})"
            )
        config = _load_config(path, config_file)
    except (ValueError, ConfigError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    if workers is not None:
        config.max_workers = workers
    if count_boolean_ops:
        config.count_boolean_operators = True

    rust_files = collect_rust_files(path, exclude, config.ignore_patterns)

    try:
        run = analyze_paths(rust_files, config)
    except NoAnalyzableFilesError as e:
        logger.debug(f"{e} ({e.context})")
        print_error(f"No Rust files found in {path}")
        raise typer.Exit(1)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)

    _report_warnings(run, verbose)

    if debug_type is not None:
        record = run.find_type(debug_type)
        if record is None:
            print_error(f"Type not found: {debug_type}")
            raise typer.Exit(1)
        _write_or_print(dumps_json(record.to_debug_dict()), output)
        return

    if not run.results:
        print_info("No structs found in the analyzed files.")
        return

    results = sort_results(run.results, sort) if sort else run.results

    if fmt is OutputFormat.TABLE and output is None:
        ConsoleReporter(console=console, thresholds=config.thresholds).print_results(
            results, selected_metrics
        )
        return

    report = generate_report(results, fmt, selected_metrics, config.thresholds)
    _write_or_print(report, output)


if __name__ == "__main__":
    app()
