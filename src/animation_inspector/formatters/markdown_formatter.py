"""Markdown formatter: the exported report text."""

from typing import Sequence

from ..report.markdown import DEFAULT_TITLE, render_all
from ..store import AnnotationEntry
from .base import BaseFormatter


class MarkdownFormatter(BaseFormatter):
    """Render the plain report, exactly as it is copied to the clipboard."""

    def render(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> None:
        print(self.format(entries, title), end="")

    def format(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> str:
        return render_all(entries, title)
