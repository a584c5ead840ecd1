"""Render annotations as a Markdown-like report.

Everything here is pure: the same entries always produce the same text.
The report is meant to be pasted into a conversation with an assistant, so
headings and labels are stable and style noise is filtered out.
"""

from __future__ import annotations

import math
import re
from typing import List, Optional, Sequence, Union

from ..capture.models import AnimationSample, ElementSnapshot
from ..store import AnnotationEntry

DEFAULT_TITLE = "Animation Feedback Report"
SEPARATOR = "---"

# Computed-style values that carry no information for the reader
UNSET_SENTINELS = frozenset({"none", "auto", "normal"})

_UPPER = re.compile(r"[A-Z]")


def to_kebab_case(name: str) -> str:
    """``backgroundColor`` -> ``background-color``."""
    return _UPPER.sub(lambda m: "-" + m.group(0).lower(), name)


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def render_entry(
    entry: AnnotationEntry,
    index: Optional[int] = None,
    *,
    omit_placeholder_note: bool = False,
) -> str:
    """Render one entry.

    Args:
        entry: The annotation to render.
        index: 1-based position; adds a numbered heading when given.
        omit_placeholder_note: Drop the feedback section when the user left
            the note empty instead of showing the placeholder.
    """
    snapshot = entry.snapshot
    blocks: List[str] = []

    if index is not None:
        blocks.append(f"## Annotation {index}")

    header = []
    if snapshot.source_location is not None:
        header.append(f"**Source:** `{snapshot.source_location}`")
    header.append(f"**Element:** `{element_identity(snapshot)}`")
    blocks.append("\n".join(header))

    if entry.has_note or not omit_placeholder_note:
        blocks.append(f"### Feedback\n\n{entry.note}")

    if snapshot.animation_samples:
        lines = [format_sample(s) for s in snapshot.animation_samples]
        blocks.append("### Animation State\n\n" + "\n".join(lines))

    style_lines = style_declarations(snapshot)
    if style_lines:
        blocks.append("### Computed Styles\n\n```css\n" + "\n".join(style_lines) + "\n```")

    payload = snapshot.svg_payload
    if payload is not None:
        if payload.is_path:
            blocks.append(f'### SVG Path\n\n```\nd="{payload.value}"\n```')
        else:
            blocks.append(f"### SVG Markup\n\n```svg\n{payload.value}\n```")

    return "\n\n".join(blocks)


def render_all(entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> str:
    """Render every entry with 1-based indices under a single heading."""
    parts = [f"# {title}", pluralize(len(entries), "annotation")]
    rendered = [render_entry(entry, i) for i, entry in enumerate(entries, start=1)]
    if rendered:
        parts.append(f"\n\n{SEPARATOR}\n\n".join(rendered))
    return "\n\n".join(parts) + "\n"


def element_identity(snapshot: ElementSnapshot) -> str:
    """``<tag#id.class-a.class-b>``; id and classes only when present."""
    ident = snapshot.tag_name
    if snapshot.element_id:
        ident += f"#{snapshot.element_id}"
    if snapshot.class_name:
        ident += "".join(f".{c}" for c in snapshot.class_name.split())
    return f"<{ident}>"


def format_sample(sample: AnimationSample) -> str:
    """``- fade: 40% (400ms / 1000ms)``."""
    if sample.progress is None or math.isnan(sample.progress):
        percent = "N/A"
    else:
        percent = f"{_round_half_up(sample.progress * 100)}%"
    return (
        f"- {sample.name}: {percent} "
        f"({format_ms(sample.current_time)} / {format_ms(sample.duration)})"
    )


def format_ms(value: Union[float, str, None]) -> str:
    if isinstance(value, str):
        return value
    if value is None or math.isnan(value):
        return "N/A"
    if math.isinf(value):
        return "infinite"
    return f"{_round_half_up(value)}ms"


def style_declarations(snapshot: ElementSnapshot) -> List[str]:
    """``kebab-case: value;`` lines, skipping unset and unreported values."""
    lines = []
    for key, value in snapshot.computed_styles.items():
        if not value or value in UNSET_SENTINELS:
            continue
        lines.append(f"{to_kebab_case(key)}: {value};")
    return lines


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
