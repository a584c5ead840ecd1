"""Session state and the events emitted on every transition."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..capture.models import ElementSnapshot
from ..host.protocols import NodeRef
from ..store import AnnotationStore


class SessionPhase(Enum):
    DISABLED = "disabled"
    IDLE = "idle"
    PENDING = "pending"


class EventType(Enum):
    """Types of events a session emits to the overlay."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    CAPTURE_STARTED = "capture_started"
    COMMITTED = "committed"
    CANCELLED = "cancelled"
    ENTRY_REMOVED = "entry_removed"
    CLEARED = "cleared"
    COPY_FINISHED = "copy_finished"


@dataclass(frozen=True)
class SessionEvent:
    event_type: EventType
    phase: SessionPhase
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SessionState:
    """Mutable state owned by exactly one controller.

    ``target_node`` is a borrowed host reference; the session never owns it.
    """

    annotations: AnnotationStore = field(default_factory=AnnotationStore)
    enabled: bool = False
    target_node: Optional[NodeRef] = None
    pending_capture: Optional[ElementSnapshot] = None

    @property
    def phase(self) -> SessionPhase:
        if not self.enabled:
            return SessionPhase.DISABLED
        if self.pending_capture is not None:
            return SessionPhase.PENDING
        return SessionPhase.IDLE

    def clear_pending(self) -> None:
        self.target_node = None
        self.pending_capture = None
