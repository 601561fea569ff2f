"""Shared utilities for the namecheck CLI."""

import logging

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr; stdout is reserved for the report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def fail(message: str) -> None:
    """Print an error in red to stderr (caller raises typer.Exit)."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
