"""Animation registry: discovers, pauses and resumes host animations.

The registry is the only component that changes animation playback. It
remembers exactly which animations *it* paused so that resuming never
touches animations that were already paused, finished or idle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from .host.protocols import AnimationLike, HostEnvironment, NodeRef
from .logging_config import get_logger

logger = get_logger(__name__)

RUNNING = "running"


@dataclass(frozen=True, eq=False)
class AnimationHandle:
    """One animation paused by the registry, tagged with its prior play state.

    Handles compare by identity of the wrapped animation.
    """

    animation: AnimationLike
    previous_state: str = RUNNING

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnimationHandle):
            return NotImplemented
        return self.animation is other.animation

    def __hash__(self) -> int:
        return id(self.animation)


class AnimationRegistry:
    """Tracks the set of animations currently paused by this tool."""

    def __init__(self, host: HostEnvironment):
        self.host = host
        self._paused: FrozenSet[AnimationHandle] = frozenset()

    @property
    def paused(self) -> FrozenSet[AnimationHandle]:
        """Handles currently paused by the registry."""
        return self._paused

    def query(self, target: Optional[NodeRef] = None) -> List[AnimationLike]:
        """Animations on ``target`` and its descendants, or document-wide."""
        if target is None:
            return list(self.host.list_animations())
        return list(self.host.list_animations(target))

    def pause(self, target: Optional[NodeRef] = None) -> FrozenSet[AnimationHandle]:
        """Pause every running animation under ``target``.

        A previously tracked set is resumed first so no animation is left
        paused without a handle.

        Returns:
            The newly tracked set of paused handles.
        """
        if self._paused:
            logger.warning(
                "pause() called with %d animation(s) still paused; resuming them first",
                len(self._paused),
            )
            self.resume()

        handles = set()
        for animation in self.query(target):
            if animation.play_state != RUNNING:
                continue
            animation.pause()
            handles.add(AnimationHandle(animation, RUNNING))

        self._paused = frozenset(handles)
        logger.debug("Paused %d running animation(s)", len(self._paused))
        return self._paused

    def resume(self) -> None:
        """Resume every animation this registry paused, then forget them."""
        if not self._paused:
            return
        paused, self._paused = self._paused, frozenset()
        for handle in paused:
            handle.animation.play()
        logger.debug("Resumed %d animation(s)", len(paused))

    def release(self) -> None:
        """Drop all handles without resuming them."""
        self._paused = frozenset()

    def __len__(self) -> int:
        return len(self._paused)
