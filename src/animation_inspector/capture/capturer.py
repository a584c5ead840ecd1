"""Capture an ElementSnapshot of a host node."""

from __future__ import annotations

import math
import re
import time
from typing import Any, Callable, Dict, Mapping, Optional

from ..host.protocols import AnimationLike, HostEnvironment, NodeRef
from ..logging_config import get_logger
from ..registry import AnimationRegistry
from .models import (
    STYLE_KEYS,
    AnimationSample,
    BoundingRect,
    ElementSnapshot,
    Phase,
    SourceLocation,
    SvgPayload,
)

logger = get_logger(__name__)

UNNAMED = "unnamed"

_UPPER = re.compile(r"[A-Z]")


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class StateCapturer:
    """Builds immutable snapshots; never changes animation playback."""

    def __init__(
        self,
        host: HostEnvironment,
        registry: AnimationRegistry,
        clock: Callable[[], int] = _epoch_millis,
    ):
        self.host = host
        self.registry = registry
        self.clock = clock

    def capture(self, node: Optional[NodeRef]) -> Optional[ElementSnapshot]:
        """Snapshot ``node``; returns None when there is no node."""
        if node is None:
            logger.debug("capture() called without a target node")
            return None

        tag = self.host.tag_name(node).lower()
        snapshot = ElementSnapshot(
            tag_name=tag,
            element_id=self.host.get_attribute(node, "id") or None,
            class_name=_normalize_class(self.host.get_attribute(node, "class")),
            source_location=self._source_location(node),
            bounding_rect=_bounding_rect(self.host.bounding_rect(node)),
            computed_styles=_pick_styles(self.host.computed_style(node)),
            animation_samples=tuple(sample_animation(a) for a in self.registry.query(node)),
            svg_payload=self._svg_payload(node, tag),
            captured_at_epoch_millis=self.clock(),
        )
        logger.debug(
            "Captured <%s> with %d animation sample(s)", tag, len(snapshot.animation_samples)
        )
        return snapshot

    def _source_location(self, node: NodeRef) -> Optional[SourceLocation]:
        meta = self.host.source_metadata(node)
        if not meta:
            return None
        try:
            return SourceLocation(
                file=str(meta["file"]),
                line=int(meta["line"]) + 1,
                column=int(meta["column"]) + 1,
            )
        except (KeyError, TypeError, ValueError):
            logger.debug("Ignoring malformed source metadata: %r", meta)
            return None

    def _svg_payload(self, node: NodeRef, tag: str) -> Optional[SvgPayload]:
        if tag == "path":
            d = self.host.get_attribute(node, "d")
            return SvgPayload("path", d) if d else None
        if tag == "svg":
            markup = self.host.inner_markup(node)
            return SvgPayload("markup", markup) if markup else None
        return None


def sample_animation(animation: AnimationLike) -> AnimationSample:
    """Derive an AnimationSample from one live animation."""
    timing = animation.effect_timing()
    duration = _drop_nan(timing.duration if timing else None)
    progress = _drop_nan(timing.progress if timing else None)
    easing = (timing.easing if timing else None) or "linear"
    current_time = _drop_nan(animation.current_time)

    if progress is not None:
        progress = min(max(float(progress), 0.0), 1.0)

    return AnimationSample(
        name=animation.animation_name or animation.id or UNNAMED,
        current_time=current_time,
        duration=duration,
        progress=progress,
        phase=_resolve_phase(timing.phase if timing else None, progress, current_time),
        play_state=animation.play_state,
        easing=easing,
    )


def _drop_nan(value):
    """NaN timing values mean "not resolved"; keywords and infinity pass through."""
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _resolve_phase(
    reported: Optional[str], progress: Optional[float], current_time: Optional[float]
) -> Phase:
    if reported:
        try:
            return Phase(reported)
        except ValueError:
            logger.debug("Unknown phase %r reported by host", reported)
    if progress is not None:
        return Phase.ACTIVE
    if current_time is not None and current_time > 0:
        return Phase.AFTER
    return Phase.BEFORE


def _normalize_class(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    normalized = " ".join(value.split())
    return normalized or None


def _bounding_rect(rect: Mapping[str, Any]) -> BoundingRect:
    return BoundingRect(
        x=float(rect.get("x", 0.0)),
        y=float(rect.get("y", 0.0)),
        width=float(rect.get("width", 0.0)),
        height=float(rect.get("height", 0.0)),
    )


def _pick_styles(style: Mapping[str, str]) -> Dict[str, str]:
    """Project a host style mapping onto the fixed key set.

    Hosts may key properties in camelCase or kebab-case.
    """
    picked: Dict[str, str] = {}
    for key in STYLE_KEYS:
        value = style.get(key)
        if value is None:
            value = style.get(_UPPER.sub(lambda m: "-" + m.group(0).lower(), key))
        picked[key] = "" if value is None else str(value).strip()
    return picked
