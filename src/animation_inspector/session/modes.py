"""Operating modes of the session engine.

Both modes share one state machine; they differ only in what happens to a
committed annotation.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionMode:
    """Strategy flags consulted by the controller.

    Attributes:
        name: Config name of the mode ("single" or "multi").
        auto_copy_on_commit: Copy the entry as soon as it is committed.
        persist_annotations: Keep entries across pick/commit cycles and
            across disable/enable.
        omit_placeholder_note: Leave the feedback section out of a rendered
            entry whose note was left empty.
    """

    name: str
    auto_copy_on_commit: bool
    persist_annotations: bool
    omit_placeholder_note: bool


SINGLE_SHOT = SessionMode(
    name="single",
    auto_copy_on_commit=True,
    persist_annotations=False,
    omit_placeholder_note=True,
)

MULTI_ANNOTATION = SessionMode(
    name="multi",
    auto_copy_on_commit=False,
    persist_annotations=True,
    omit_placeholder_note=False,
)

_MODES = {mode.name: mode for mode in (SINGLE_SHOT, MULTI_ANNOTATION)}


def mode_for(name: str) -> SessionMode:
    """Look up a mode by its config name."""
    try:
        return _MODES[name]
    except KeyError:
        raise ValueError(f"Unknown mode: {name!r}. Choose from: {', '.join(sorted(_MODES))}")
