"""Session controller: the capture-and-annotate state machine.

States and transitions::

    DISABLED --enable--> IDLE --pick--> PENDING --commit/cancel--> IDLE
    IDLE/PENDING --disable--> DISABLED   (a pending capture is cancelled)

The controller is the only entry point for input events. It guarantees at
most one pending capture and that every animation it paused is resumed when
a capture is committed, cancelled, or the tool is disabled.

Example:
    >>> controller = SessionController(host, config=load_config(mode="multi"))
    >>> controller.enable()
    >>> controller.pick(node)
    >>> controller.commit("slower")
    >>> print(controller.report())
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from ..capture.capturer import StateCapturer
from ..capture.models import ElementSnapshot
from ..clipboard import ClipboardSink, ClipboardTask, get_clipboard, start_copy
from ..config import InspectorConfig, default_config
from ..host.protocols import HostEnvironment, NodeRef
from ..logging_config import get_logger
from ..registry import AnimationRegistry
from ..report.markdown import render_all, render_entry
from ..store import AnnotationEntry, AnnotationStore
from .modes import SessionMode, mode_for
from .state import EventType, SessionEvent, SessionPhase, SessionState

logger = get_logger(__name__)

Listener = Callable[[SessionEvent], None]


class SessionController:
    """Orchestrates registry, capturer, store and report for one overlay.

    Each controller owns its own :class:`SessionState`, so several overlays
    (or tests) can run side by side.
    """

    def __init__(
        self,
        host: HostEnvironment,
        config: Optional[InspectorConfig] = None,
        clipboard: Optional[ClipboardSink] = None,
        capturer: Optional[StateCapturer] = None,
    ):
        self.host = host
        self.config = config or default_config
        self.mode: SessionMode = mode_for(self.config.mode)
        self.registry = AnimationRegistry(host)
        self.capturer = capturer or StateCapturer(host, self.registry)
        self.state = SessionState(annotations=AnnotationStore())
        self.clipboard = clipboard or get_clipboard(
            self.config.clipboard, self.config.clipboard_file
        )
        self.mount_node: Optional[NodeRef] = None
        self.copied = False
        self.last_copy: Optional[ClipboardTask] = None
        self._listeners: List[Listener] = []

    # ── Read-only views ───────────────────────────────────────────

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    @property
    def target_node(self) -> Optional[NodeRef]:
        """Node the highlight overlay should follow, if any."""
        return self.state.target_node

    @property
    def pending_capture(self) -> Optional[ElementSnapshot]:
        return self.state.pending_capture

    @property
    def store(self) -> AnnotationStore:
        return self.state.annotations

    @property
    def annotations(self) -> Tuple[AnnotationEntry, ...]:
        return self.store.list()

    # ── Listeners ─────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it.

        ``COPY_FINISHED`` may be delivered from the clipboard thread.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, event_type: EventType, **data) -> None:
        event = SessionEvent(event_type, self.phase, data)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Session listener failed on %s", event_type.value)

    # ── Enable / disable ──────────────────────────────────────────

    def enable(self) -> None:
        if self.state.enabled:
            return
        self.state.enabled = True
        logger.debug("Inspector enabled (%s mode)", self.mode.name)
        self._emit(EventType.ENABLED)

    def disable(self) -> None:
        if self.phase is SessionPhase.PENDING:
            self.cancel()
        # Nothing may stay paused once the tool disengages
        self.registry.resume()
        if not self.state.enabled:
            return
        self.state.enabled = False
        if not self.mode.persist_annotations:
            self.store.clear()
        logger.debug("Inspector disabled")
        self._emit(EventType.DISABLED)

    def toggle(self) -> bool:
        """Flip the enabled state; returns the new value."""
        if self.state.enabled:
            self.disable()
        else:
            self.enable()
        return self.state.enabled

    # ── Capture lifecycle ─────────────────────────────────────────

    def pick(
        self,
        node: Optional[NodeRef] = None,
        viewport_x: Optional[float] = None,
        viewport_y: Optional[float] = None,
    ) -> Optional[ElementSnapshot]:
        """Freeze and capture ``node`` (or the node at the viewport point).

        Returns the pending capture, or None when the pick was ignored:
        the tool is disabled, a capture is already pending, no node
        resolves, or the node is the overlay's own mount element.
        """
        if not self.state.enabled:
            logger.debug("pick ignored: inspector disabled")
            return None
        if self.phase is SessionPhase.PENDING:
            logger.debug("pick ignored: a capture is already pending")
            return None

        if node is None and viewport_x is not None and viewport_y is not None:
            node = self.host.node_at(viewport_x, viewport_y)
        if node is None:
            logger.debug("pick ignored: no target node")
            return None
        if self.mount_node is not None and node is self.mount_node:
            logger.debug("pick ignored: overlay element")
            return None

        paused = self.registry.pause(node)
        snapshot = self.capturer.capture(node)
        if snapshot is None:
            self.registry.resume()
            return None

        self.state.target_node = node
        self.state.pending_capture = snapshot
        self._emit(
            EventType.CAPTURE_STARTED,
            tag_name=snapshot.tag_name,
            paused=len(paused),
        )
        return snapshot

    def commit(self, note: Optional[str] = "") -> Optional[AnnotationEntry]:
        """Store the pending capture with ``note`` and resume animations."""
        pending = self.state.pending_capture
        if pending is None:
            logger.debug("commit ignored: nothing pending")
            return None

        if not self.mode.persist_annotations:
            self.store.clear()
        entry = self.store.add(pending, note)
        self.registry.resume()
        self.state.clear_pending()
        self._emit(EventType.COMMITTED, entry_id=entry.id)

        if self.mode.auto_copy_on_commit:
            self.copy_one(entry.id)
        return entry

    def cancel(self) -> None:
        """Discard the pending capture and resume animations."""
        if self.state.pending_capture is None:
            return
        self.registry.resume()
        self.state.clear_pending()
        self._emit(EventType.CANCELLED)

    # ── Store management ──────────────────────────────────────────

    def remove_entry(self, entry_id: str) -> None:
        if entry_id not in self.store:
            return
        self.store.remove(entry_id)
        self._emit(EventType.ENTRY_REMOVED, entry_id=entry_id)

    def clear_all(self) -> None:
        self.store.clear()
        self._emit(EventType.CLEARED)

    # ── Export ────────────────────────────────────────────────────

    def report(self) -> str:
        """Batch report of every stored annotation."""
        return render_all(self.store.list(), title=self.config.report_title)

    def render_one(self, entry: AnnotationEntry) -> str:
        return render_entry(entry, omit_placeholder_note=self.mode.omit_placeholder_note)

    def copy_all(self) -> Optional[ClipboardTask]:
        """Copy the batch report; None when there is nothing to copy."""
        if not len(self.store):
            logger.debug("copy_all ignored: no annotations")
            return None
        return self._copy(self.report())

    def copy_one(self, entry_id: Optional[str] = None) -> Optional[ClipboardTask]:
        """Copy one entry, the most recent one by default."""
        entry = self.store.get(entry_id) if entry_id is not None else self.store.latest()
        if entry is None:
            logger.debug("copy_one ignored: no such annotation %s", entry_id)
            return None
        return self._copy(self.render_one(entry))

    def _copy(self, text: str) -> ClipboardTask:
        self.copied = False
        self.last_copy = start_copy(
            self.clipboard,
            text,
            on_done=self._on_copy_done,
            background=self.config.async_clipboard,
        )
        return self.last_copy

    def _on_copy_done(self, task: ClipboardTask) -> None:
        self.copied = bool(task.succeeded)
        if not task.succeeded:
            logger.info("Report was not copied")
        self._emit(EventType.COPY_FINISHED, succeeded=self.copied)

    # ── Teardown ──────────────────────────────────────────────────

    def teardown(self) -> None:
        """Disable, resume everything and drop all host references."""
        self.disable()
        self.registry.release()
        self.state.clear_pending()
        self.mount_node = None
        self._listeners.clear()
