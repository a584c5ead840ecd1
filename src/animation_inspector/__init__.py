"""
Animation Inspector - freeze, capture and annotate running animations

Pauses the animations under a picked node, snapshots its visual and
animation state, pairs snapshots with free-text feedback and exports a
deterministic Markdown report for an assistant to read.
"""

__version__ = "0.1.0"

from .capture import AnimationSample, ElementSnapshot, StateCapturer
from .config import InspectorConfig, load_config
from .host.mount import mount_overlay
from .registry import AnimationRegistry
from .report import render_all, render_entry
from .session import SessionController, SessionPhase
from .store import AnnotationEntry, AnnotationStore

__all__ = [
    "mount_overlay",  # Main entry point
    "SessionController",
    "SessionPhase",
    "AnimationRegistry",
    "StateCapturer",
    "AnnotationStore",
    "AnnotationEntry",
    "AnimationSample",
    "ElementSnapshot",
    "InspectorConfig",
    "load_config",
    "render_all",
    "render_entry",
]
