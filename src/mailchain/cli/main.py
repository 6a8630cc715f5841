#!/usr/bin/env python3
"""
MailChain CLI Main Application

Typer-based command-line interface for building and running message
pipelines.
"""

from typing import Optional

import typer
from rich.console import Console

from mailchain.cli import __version__
from mailchain.cli.commands import config, run

console = Console(stderr=True)

app = typer.Typer(
    name="mailchain",
    help="Filter, copy and forward messages through a configurable pipeline",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command("run")(run.run_pipeline)
app.add_typer(config.app, name="config", help="Inspect and create configuration files")


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]MailChain[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
):
    """
    MailChain - message pipelines from the command line

    [bold]Quick Start:[/bold]

    • Pass messages through: [cyan]mailchain run inbox.txt[/cyan]
    • Keep one sender: [cyan]mailchain run inbox.txt --from erich@example.com[/cyan]
    • Copy to an address: [cyan]mailchain run inbox.txt --copy-to audit@example.com[/cyan]
    • Show configured chain: [cyan]mailchain config show[/cyan]
    """
    pass


def main():
    """Entry point for the mailchain console script."""
    app()


if __name__ == "__main__":
    main()
