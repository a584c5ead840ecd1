"""Capability interfaces the engine consumes from the host environment.

The engine never touches platform objects directly. A host-integration layer
adapts whatever the rendering environment exposes (a browser driver, a test
double, a recorded scene) to these narrow protocols. Nodes are opaque: the
engine only passes them back to the host and never assumes ownership.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

# Opaque, non-owning reference to a host node
NodeRef = Any

# Durations may be numeric milliseconds or a keyword such as "auto"
Duration = Union[float, str, None]


@dataclass(frozen=True)
class EffectTiming:
    """Computed timing of an animation's effect at one instant."""

    duration: Duration = None
    progress: Optional[float] = None
    phase: Optional[str] = None
    easing: str = "linear"


@runtime_checkable
class AnimationLike(Protocol):
    """One host-managed, time-driven visual effect attached to a node."""

    @property
    def play_state(self) -> str:
        """One of "idle", "running", "paused", "finished"."""
        ...

    @property
    def current_time(self) -> Optional[float]:
        """Current time in milliseconds, or None when unresolved."""
        ...

    @property
    def animation_name(self) -> Optional[str]:
        """Declared animation name (e.g. a CSS keyframes name), if any."""
        ...

    @property
    def id(self) -> Optional[str]:
        ...

    def effect_timing(self) -> Optional[EffectTiming]:
        ...

    def pause(self) -> None:
        ...

    def play(self) -> None:
        ...


class HostEnvironment(Protocol):
    """Document tree, style and geometry queries plus overlay mounting."""

    def list_animations(self, node: Optional[NodeRef] = None) -> Sequence[AnimationLike]:
        """Animations on ``node`` and its descendants, or the whole document."""
        ...

    def computed_style(self, node: NodeRef) -> Mapping[str, str]:
        ...

    def bounding_rect(self, node: NodeRef) -> Mapping[str, float]:
        """Mapping with ``x``, ``y``, ``width`` and ``height``."""
        ...

    def tag_name(self, node: NodeRef) -> str:
        ...

    def get_attribute(self, node: NodeRef, name: str) -> Optional[str]:
        ...

    def inner_markup(self, node: NodeRef) -> Optional[str]:
        ...

    def source_metadata(self, node: NodeRef) -> Optional[Mapping[str, Any]]:
        """Debug metadata with ``file`` and 0-based ``line``/``column``."""
        ...

    def node_at(self, x: float, y: float) -> Optional[NodeRef]:
        """Topmost node at viewport coordinates."""
        ...

    def has_element(self, element_id: str) -> bool:
        ...

    def create_element(self, element_id: str) -> NodeRef:
        ...
