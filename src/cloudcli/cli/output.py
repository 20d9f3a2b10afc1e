"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

import json
import logging
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

# Global console instance
console = Console()

# Log records go to stderr so that --json output stays parseable
err_console = Console(stderr=True)


def configure_logging(debug: bool = False) -> None:
    """Route log records through Rich; --debug shows everything."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def print_json(data: Any) -> None:
    """Print machine-readable JSON without styling or wrapping."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))

