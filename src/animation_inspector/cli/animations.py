"""Animations command: list the animations the registry would see."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..capture.capturer import sample_animation
from ..exceptions import InspectorError
from ..host.memory import load_scene
from ..report.markdown import format_ms
from . import app
from ._common import console, find_node


@app.command()
def animations(
    scene: Path = typer.Argument(
        ...,
        help="Scene description (JSON)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Element id; only this node and its descendants are listed",
    ),
    running_only: bool = typer.Option(
        False,
        "--running-only",
        help="Only list animations a pick would pause",
    ),
):
    """List the animations attached to a scene's nodes."""
    try:
        host = load_scene(scene)
    except InspectorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    start = find_node(host, target) if target else host.root

    table = Table(title="Animations", show_lines=False)
    table.add_column("Node", style="cyan")
    table.add_column("Name")
    table.add_column("State")
    table.add_column("Progress", justify="right")
    table.add_column("Time", justify="right")

    rows = 0
    for node in start.walk():
        for animation in node.animations:
            if running_only and animation.play_state != "running":
                continue
            sample = sample_animation(animation)
            progress = "N/A" if sample.progress is None else f"{sample.progress * 100:.0f}%"
            table.add_row(
                repr(node),
                sample.name,
                sample.play_state,
                progress,
                f"{format_ms(sample.current_time)} / {format_ms(sample.duration)}",
            )
            rows += 1

    if rows == 0:
        console.print("[dim]No animations found[/dim]")
        return
    console.print(table)
