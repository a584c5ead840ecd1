"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__

app = typer.Typer(
    name="animation-inspector",
    help="Animation Inspector - freeze, capture and annotate running animations",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"animation-inspector {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Replay recorded scenes through the capture-and-annotate engine."""


# Import subcommands to register them
from .replay import replay as _replay  # noqa: F401, E402
from .animations import animations as _animations  # noqa: F401, E402
from .show_config import show_config as _show_config  # noqa: F401, E402
