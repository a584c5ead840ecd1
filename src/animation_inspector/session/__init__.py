"""Session engine: state machine, modes and events."""

from .controller import SessionController
from .modes import MULTI_ANNOTATION, SINGLE_SHOT, SessionMode, mode_for
from .state import EventType, SessionEvent, SessionPhase, SessionState

__all__ = [
    "SessionController",
    "SessionMode",
    "SINGLE_SHOT",
    "MULTI_ANNOTATION",
    "mode_for",
    "EventType",
    "SessionEvent",
    "SessionPhase",
    "SessionState",
]
