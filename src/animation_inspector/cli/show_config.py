"""Config command: show the effective configuration."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..config import config_as_dict
from ..exceptions import InspectorError
from . import app
from ._common import console, resolve_config


@app.command("config")
def show_config(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """Print the configuration after merging files, environment and defaults."""
    try:
        settings = resolve_config(config=config)
    except InspectorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Animation Inspector Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in config_as_dict(settings).items():
        table.add_row(key, str(value))
    console.print(table)
