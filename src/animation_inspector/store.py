"""Annotation store: an ordered collection of (snapshot, note) entries."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from .capture.models import ElementSnapshot
from .logging_config import get_logger

logger = get_logger(__name__)

NO_NOTE_PLACEHOLDER = "(no note)"


@dataclass(frozen=True)
class AnnotationEntry:
    """A committed snapshot paired with the user's note."""

    id: str
    snapshot: ElementSnapshot
    note: str
    note_was_blank: bool = False

    @property
    def has_note(self) -> bool:
        """False when the user left the note empty and ``note`` is the placeholder."""
        return not self.note_was_blank


class AnnotationStore:
    """Insertion-ordered entries with ids that stay stable for the session.

    Ids are never reused, even after removal or :meth:`clear`.
    """

    def __init__(self, id_prefix: str = "ann"):
        self._entries: Dict[str, AnnotationEntry] = {}
        self._counter = itertools.count(1)
        self._id_prefix = id_prefix

    def add(self, snapshot: ElementSnapshot, note: Optional[str] = "") -> AnnotationEntry:
        """Append a new entry; blank notes become the placeholder.

        Non-blank notes are stored exactly as entered.
        """
        blank = not (note or "").strip()
        entry = AnnotationEntry(
            id=f"{self._id_prefix}-{next(self._counter)}",
            snapshot=snapshot,
            note=NO_NOTE_PLACEHOLDER if blank else note,
            note_was_blank=blank,
        )
        self._entries[entry.id] = entry
        logger.debug("Added annotation %s for <%s>", entry.id, snapshot.tag_name)
        return entry

    def remove(self, entry_id: str) -> None:
        """Remove the entry with ``entry_id``; unknown ids are ignored."""
        if self._entries.pop(entry_id, None) is not None:
            logger.debug("Removed annotation %s", entry_id)

    def clear(self) -> None:
        self._entries.clear()

    def get(self, entry_id: str) -> Optional[AnnotationEntry]:
        return self._entries.get(entry_id)

    def count(self) -> int:
        return len(self._entries)

    def list(self) -> Tuple[AnnotationEntry, ...]:
        """Read-only view in insertion order."""
        return tuple(self._entries.values())

    def latest(self) -> Optional[AnnotationEntry]:
        if not self._entries:
            return None
        return next(reversed(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AnnotationEntry]:
        return iter(self.list())

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries
