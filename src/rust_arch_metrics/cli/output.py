"""Console output helpers for the rust-arch-metrics CLI.

Status messages go to stderr so stdout carries only the report.
"""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[bold red]✗[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an informational message."""
    err_console.print(f"[blue]ℹ[/blue] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(f"[green]✓[/green] {message}")
