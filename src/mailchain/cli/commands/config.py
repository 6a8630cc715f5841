"""
Config Command

Inspect the effective configuration and create an example file.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from mailchain.cli.error_handling import handle_error
from mailchain.cli.utils import console
from mailchain.core.config import AppConfig, ConfigManager
from mailchain.core.exceptions import MailChainError

app = typer.Typer(
    name="config",
    help="Inspect and create configuration files",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _describe_stage(stage) -> str:
    if stage.type == "filter":
        parts = []
        for definition in stage.filters:
            settings = ", ".join(f"{k}={v}" for k, v in (definition.get('config') or {}).items())
            parts.append(f"{definition.get('type')}({settings})")
        return f" {stage.composition.upper()} ".join(parts)
    if stage.type == "copy_to":
        return stage.recipient
    return str(stage.path) if stage.path else "default output"


def print_pipeline_table(config: AppConfig) -> None:
    """Print the stage list of a configuration as a table."""
    table = Table(title="Pipeline Stages", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Stage")
    table.add_column("Settings")

    source = str(config.input.path) if config.input.path else "stdin"
    table.add_row("0", "source", f"{source} (on partial: {config.input.on_partial.value})")
    for position, stage in enumerate(config.stages, 1):
        table.add_row(str(position), stage.type, escape(_describe_stage(stage)))
    if not config.has_sink:
        destination = str(config.output.path) if config.output.path else "stdout"
        table.add_row(str(len(config.stages) + 1), "send", f"{destination} (implicit)")

    console.print(table)


@app.command("show")
def show_config(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
):
    """Show the effective pipeline configuration."""
    try:
        app_config = ConfigManager(config_file=config).load_config()
    except MailChainError as err:
        handle_error(err)
    print_pipeline_table(app_config)


@app.command("init")
def init_config(
    path: Annotated[Path, typer.Argument(help="Where to write the example configuration")] = Path("mailchain.yaml"),
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """Write an example configuration file."""
    if path.exists() and not force:
        console.print(f"[red]{path} already exists[/red] (use --force to overwrite)")
        raise typer.Exit(code=1)

    ConfigManager().create_example_config(path)
    console.print(f"[green]Wrote example configuration to {path}[/green]")
