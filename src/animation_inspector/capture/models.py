"""Data models for captures: immutable records of a node at one instant."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

# Fixed, ordered set of computed-style keys recorded for every capture
STYLE_KEYS: Tuple[str, ...] = (
    "transform",
    "opacity",
    "width",
    "height",
    "top",
    "left",
    "margin",
    "padding",
    "backgroundColor",
    "color",
    "borderRadius",
    "fill",
    "stroke",
    "strokeWidth",
    "strokeDasharray",
    "strokeDashoffset",
    "visibility",
    "display",
)


class Phase(Enum):
    """Position of an animation relative to its active interval."""

    BEFORE = "before"
    ACTIVE = "active"
    AFTER = "after"


@dataclass(frozen=True)
class AnimationSample:
    """State of one animation at capture time."""

    name: str
    current_time: Optional[float]
    duration: Union[float, str, None]
    progress: Optional[float]  # 0..1, None when unresolvable
    phase: Phase
    play_state: str
    easing: str = "linear"


@dataclass(frozen=True)
class BoundingRect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class SourceLocation:
    """Originating source position, 1-based line and column."""

    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class SvgPayload:
    """Path data of an SVG ``<path>`` or inner markup of an ``<svg>`` root."""

    kind: str  # "path" or "markup"
    value: str

    @property
    def is_path(self) -> bool:
        return self.kind == "path"


@dataclass(frozen=True)
class ElementSnapshot:
    """Complete, immutable record of one node at the moment of capture.

    ``computed_styles`` always holds exactly :data:`STYLE_KEYS`, in order.
    Values may be sentinels such as ``none``/``auto``/``normal`` or the empty
    string when the host did not report the property.
    """

    tag_name: str
    bounding_rect: BoundingRect
    computed_styles: Mapping[str, str] = field(hash=False)
    animation_samples: Tuple[AnimationSample, ...] = ()
    element_id: Optional[str] = None
    class_name: Optional[str] = None
    source_location: Optional[SourceLocation] = None
    svg_payload: Optional[SvgPayload] = None
    captured_at_epoch_millis: int = 0

    def __post_init__(self) -> None:
        if tuple(self.computed_styles) != STYLE_KEYS:
            raise ValueError("computed_styles must contain exactly the fixed style key set")
        # Freeze the mapping so the snapshot cannot be mutated through it
        object.__setattr__(
            self, "computed_styles", MappingProxyType(dict(self.computed_styles))
        )
        object.__setattr__(self, "animation_samples", tuple(self.animation_samples))

    @property
    def svg_path_data(self) -> Optional[str]:
        if self.svg_payload is not None and self.svg_payload.is_path:
            return self.svg_payload.value
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain data for debugging and JSON dumps."""
        return {
            "tag_name": self.tag_name,
            "element_id": self.element_id,
            "class_name": self.class_name,
            "source_location": str(self.source_location) if self.source_location else None,
            "bounding_rect": asdict(self.bounding_rect),
            "computed_styles": dict(self.computed_styles),
            "animation_samples": [
                {**asdict(s), "phase": s.phase.value} for s in self.animation_samples
            ],
            "svg_payload": asdict(self.svg_payload) if self.svg_payload else None,
            "captured_at_epoch_millis": self.captured_at_epoch_millis,
        }


def empty_styles() -> Dict[str, str]:
    return {key: "" for key in STYLE_KEYS}
