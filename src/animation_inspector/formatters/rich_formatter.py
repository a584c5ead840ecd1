"""Rich terminal formatter: previews the report as rendered Markdown."""

from typing import Sequence

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from ..report.markdown import DEFAULT_TITLE, pluralize, render_entry
from ..store import AnnotationEntry
from .base import BaseFormatter

console = Console()


class RichFormatter(BaseFormatter):
    """Summary panel followed by each annotation rendered as Markdown."""

    def __init__(self, console: Console = console):
        self.console = console

    def render(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> None:
        self.console.print(
            Panel(
                f"[bold]{pluralize(len(entries), 'annotation')}[/bold]",
                title=f"[bold cyan]{title}[/bold cyan]",
                expand=False,
            )
        )
        for i, entry in enumerate(entries, start=1):
            self.console.print(Markdown(render_entry(entry, i)))
            if i < len(entries):
                self.console.rule(style="dim")

    def format(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> str:
        with self.console.capture() as capture:
            self.render(entries, title)
        return capture.get()
