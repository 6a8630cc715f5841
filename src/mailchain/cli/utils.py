"""
CLI Utilities

Shared utilities for CLI commands: logging setup, stream handling and
summary output.
"""

import logging
import sys
from contextlib import ExitStack
from typing import TextIO

from rich.console import Console
from rich.table import Table

from mailchain.core.config.models import AppConfig
from mailchain.core.pipeline.interfaces import Stage

# Messages go to stdout; everything meant for the user goes to stderr
console = Console(stderr=True)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "WARNING") -> None:
    """Set up logging configuration for the application."""
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr
    )
    logging.getLogger("mailchain").setLevel(getattr(logging, level))


def open_input(config: AppConfig, stack: ExitStack) -> TextIO:
    """Open the configured input, or return stdin when no path is set."""
    if config.input.path is None:
        return sys.stdin
    return stack.enter_context(open(config.input.path, 'r', encoding=config.input.encoding))


def open_output(config: AppConfig, stack: ExitStack) -> TextIO:
    """Open the configured output, or return stdout when no path is set."""
    if config.output.path is None:
        return sys.stdout
    mode = 'a' if config.output.append else 'w'
    return stack.enter_context(open(config.output.path, mode, encoding=config.output.encoding))


def print_stage_summary(pipeline: Stage) -> None:
    """Print per-stage message counts for a pipeline that has run."""
    table = Table(title="Pipeline Summary", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Stage")
    table.add_column("Received", justify="right")
    table.add_column("Forwarded", justify="right")
    table.add_column("Dropped", justify="right")

    for position, stage in enumerate(pipeline):
        stats = stage.stats
        table.add_row(
            str(position),
            stage.name,
            str(stats.received),
            str(stats.forwarded),
            str(stats.dropped)
        )

    console.print(table)


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    console.print("\n[yellow]Operation cancelled by user[/yellow]")
    sys.exit(130)
