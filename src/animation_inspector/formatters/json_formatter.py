"""JSON formatter: raw snapshot data for debugging host adapters."""

import json
from typing import Sequence

from ..report.markdown import DEFAULT_TITLE
from ..store import AnnotationEntry
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render entries and their snapshots as JSON."""

    def render(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> None:
        print(self.format(entries, title))

    def format(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> str:
        data = {
            "title": title,
            "annotations": [
                {"id": e.id, "note": e.note, "snapshot": e.snapshot.to_dict()} for e in entries
            ],
        }
        return json.dumps(data, indent=2)
