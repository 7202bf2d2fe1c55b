"""Console reporter for architectural metrics."""

from __future__ import annotations

import io
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from ...config.thresholds import MetricThresholds
from ...core.models import METRIC_NAMES

if TYPE_CHECKING:
    from ...core.models import AnalysisResult

EMPTY_MESSAGE = "No structs found to analyze."

METRIC_EXPLANATIONS = {
    "lcom": "LCOM (0-1): Lack of Cohesion in Methods (lower is better)",
    "cbo": "CBO:        Coupling Between Objects (lower is better)",
    "wmc": "WMC:        Weighted Methods per Class (complexity)",
}


class ConsoleReporter:
    """Renders analysis results as a rich table."""

    def __init__(
        self,
        console: Console | None = None,
        thresholds: MetricThresholds | None = None,
    ) -> None:
        self.console = console or Console()
        self.thresholds = thresholds or MetricThresholds()

    def build_table(
        self, results: Sequence[AnalysisResult], metrics: tuple[str, ...] = METRIC_NAMES
    ) -> Table:
        """Build the metrics table.

        Values at or above their warning threshold are highlighted.

        Args:
            results: Analysis results to display
            metrics: Metric columns to include

        Returns:
            Rich Table
        """
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Struct Name", style="bold", min_width=30)
        for metric in METRIC_NAMES:
            if metric in metrics:
                table.add_column(metric.upper(), justify="right", width=10)

        for result in results:
            row = [result.type_name]
            for metric in METRIC_NAMES:
                if metric not in metrics:
                    continue
                value = getattr(result, metric)
                text = f"{value:.3f}" if metric == "lcom" else f"{value}"
                if self.thresholds.exceeded(metric, value):
                    text = f"[red]{text}[/red]"
                row.append(text)
            table.add_row(*row)

        return table

    def print_results(
        self, results: Sequence[AnalysisResult], metrics: tuple[str, ...] = METRIC_NAMES
    ) -> None:
        """Print the metrics table followed by metric explanations.

        Args:
            results: Analysis results to display
            metrics: Metric columns to include
        """
        if not results:
            self.console.print(EMPTY_MESSAGE)
            return

        self.console.print(self.build_table(results, metrics))
        self.console.print()
        self.console.print("[bold]Metric Explanations:[/bold]")
        for metric in METRIC_NAMES:
            if metric in metrics:
                self.console.print(f"  {METRIC_EXPLANATIONS[metric]}")

    def print_warnings(self, warnings: Sequence[str]) -> None:
        """Print run warnings (skipped files, merge collisions)."""
        if not warnings:
            return

        self.console.print()
        self.console.print(f"[bold yellow]⚠ {len(warnings)} warning(s)[/bold yellow]")
        for message in warnings:
            self.console.print(f"  [yellow]•[/yellow] {message}")


def render_table(
    results: Sequence[AnalysisResult],
    metrics: tuple[str, ...] = METRIC_NAMES,
    thresholds: MetricThresholds | None = None,
) -> str:
    """Render the table report as plain text (for files and pipes)."""
    console = Console(file=io.StringIO(), record=True, width=100, color_system=None)
    ConsoleReporter(console=console, thresholds=thresholds).print_results(
        results, metrics
    )
    return console.export_text()
