"""State capture: immutable snapshots of a node's visual and animation state."""

from .models import (
    STYLE_KEYS,
    AnimationSample,
    BoundingRect,
    ElementSnapshot,
    Phase,
    SourceLocation,
    SvgPayload,
)
from .capturer import StateCapturer, sample_animation

__all__ = [
    "STYLE_KEYS",
    "AnimationSample",
    "BoundingRect",
    "ElementSnapshot",
    "Phase",
    "SourceLocation",
    "SvgPayload",
    "StateCapturer",
    "sample_animation",
]
