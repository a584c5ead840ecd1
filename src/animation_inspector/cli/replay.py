"""Replay command: drive a session over a recorded scene."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..clipboard import MemoryClipboard
from ..exceptions import InspectorError
from ..formatters import get_formatter
from ..host.memory import load_scene
from ..host.mount import mount_overlay
from ..logging_config import get_logger, setup_logging
from . import app
from ._common import console, find_node, parse_annotation, resolve_config

COPY_TIMEOUT_SECONDS = 5.0

logger = get_logger(__name__)


@app.command()
def replay(
    scene: Path = typer.Argument(
        ...,
        help="Scene description (JSON)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    annotate: List[str] = typer.Option(
        [],
        "--annotate",
        "-a",
        help="TARGET=NOTE, where TARGET is an element id or @X,Y (repeatable)",
    ),
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="single: copy each annotation | multi: batch annotations",
    ),
    output_format: str = typer.Option(
        "markdown",
        "--format",
        "-f",
        help="Output format: markdown | rich | json",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout",
    ),
    copy: bool = typer.Option(
        False,
        "--copy/--no-copy",
        help="Copy the report with the configured clipboard sink",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
):
    """
    Pick, freeze and annotate nodes of a recorded scene, then print the report.

    [bold cyan]Examples:[/bold cyan]

      animation-inspector replay scene.json -a card=slower

      animation-inspector replay scene.json -a @120,40="too bouncy" --format rich

      animation-inspector replay scene.json -a card= --mode single --copy
    """
    try:
        settings = resolve_config(config=config, mode=mode, verbose=verbose)
        setup_logging(settings.verbosity)
        formatter = get_formatter(output_format)
        host = load_scene(scene)

        clipboard = None if copy else MemoryClipboard()
        controller = mount_overlay(host, config=settings, clipboard=clipboard)
        controller.enable()

        for spec in annotate:
            target, note = parse_annotation(spec)
            if isinstance(target, tuple):
                snapshot = controller.pick(viewport_x=target[0], viewport_y=target[1])
            else:
                snapshot = controller.pick(find_node(host, target))
            if snapshot is None:
                console.print(f"[yellow]Nothing to capture at {escape(spec.partition('=')[0])}[/yellow]")
                continue
            controller.commit(note)
            if controller.last_copy is not None:
                controller.last_copy.wait(COPY_TIMEOUT_SECONDS)

        entries = controller.annotations
        if output is not None:
            output.write_text(formatter.format(entries, settings.report_title), encoding="utf-8")
            console.print(f"Report saved to: [bold green]{output}[/bold green]")
        else:
            formatter.render(entries, settings.report_title)

        if copy:
            if not settings.is_single_shot:
                task = controller.copy_all()
                if task is not None:
                    task.wait(COPY_TIMEOUT_SECONDS)
            if controller.copied:
                console.print("[green]Copied to clipboard[/green]")
            else:
                console.print("[yellow]Report was not copied[/yellow]")

        controller.teardown()

    except typer.Exit:
        raise

    except typer.BadParameter:
        raise

    except (InspectorError, ValueError) as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
