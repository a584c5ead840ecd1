"""In-memory host environment built from plain data.

Used by the test-suite and by the CLI to replay a recorded scene. A scene is
a JSON document describing a node tree and the animations attached to it::

    {
      "nodes": [
        {
          "tag": "div", "id": "card", "class": "card",
          "rect": {"x": 0, "y": 0, "width": 320, "height": 180},
          "style": {"opacity": "1", "transform": "none"},
          "source": {"file": "src/Card.svelte", "line": 11, "column": 4},
          "animations": [
            {"name": "fade", "play_state": "running", "current_time": 400,
             "duration": 1000, "progress": 0.4, "phase": "active"}
          ],
          "children": []
        }
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from ..exceptions import SceneError
from ..logging_config import get_logger
from .protocols import Duration, EffectTiming

logger = get_logger(__name__)

PLAY_STATES = ("idle", "running", "paused", "finished")


class MemoryAnimation:
    """Animation double with web-animation style pause/play semantics."""

    def __init__(
        self,
        name: Optional[str] = None,
        anim_id: Optional[str] = None,
        play_state: str = "running",
        current_time: Optional[float] = 0.0,
        duration: Duration = None,
        progress: Optional[float] = None,
        phase: Optional[str] = None,
        easing: str = "linear",
    ):
        if play_state not in PLAY_STATES:
            raise ValueError(f"Unknown play state: {play_state!r}")
        self._name = name
        self._id = anim_id
        self._play_state = play_state
        self._current_time = current_time
        self.duration = duration
        self.progress = progress
        self.phase = phase
        self.easing = easing
        self.pause_calls = 0
        self.play_calls = 0

    @property
    def play_state(self) -> str:
        return self._play_state

    @property
    def current_time(self) -> Optional[float]:
        return self._current_time

    @property
    def animation_name(self) -> Optional[str]:
        return self._name

    @property
    def id(self) -> Optional[str]:
        return self._id

    def effect_timing(self) -> EffectTiming:
        return EffectTiming(
            duration=self.duration,
            progress=self.progress,
            phase=self.phase,
            easing=self.easing,
        )

    def pause(self) -> None:
        self.pause_calls += 1
        self._play_state = "paused"

    def play(self) -> None:
        self.play_calls += 1
        self._play_state = "running"

    def __repr__(self) -> str:
        label = self._name or self._id or "unnamed"
        return f"MemoryAnimation({label!r}, {self._play_state})"


class MemoryNode:
    """A node in the in-memory document tree."""

    def __init__(
        self,
        tag: str,
        attributes: Optional[Dict[str, str]] = None,
        style: Optional[Dict[str, str]] = None,
        rect: Optional[Dict[str, float]] = None,
        animations: Optional[List[MemoryAnimation]] = None,
        source: Optional[Dict[str, Any]] = None,
        markup: Optional[str] = None,
    ):
        self.tag = tag.lower()
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.style: Dict[str, str] = dict(style or {})
        self.rect: Dict[str, float] = {"x": 0.0, "y": 0.0, "width": 0.0, "height": 0.0}
        if rect:
            self.rect.update({k: float(v) for k, v in rect.items()})
        self.animations: List[MemoryAnimation] = list(animations or [])
        self.source = source
        self.markup = markup
        self.children: List[MemoryNode] = []
        self.parent: Optional[MemoryNode] = None
        # False for overlay elements that must not intercept picks (pointer-events: none)
        self.hit_testable = True

    @property
    def element_id(self) -> Optional[str]:
        return self.attributes.get("id")

    def append(self, child: "MemoryNode") -> "MemoryNode":
        child.parent = self
        self.children.append(child)
        return child

    def walk(self) -> Iterator["MemoryNode"]:
        """Yield this node and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def contains_point(self, x: float, y: float) -> bool:
        r = self.rect
        return r["x"] <= x <= r["x"] + r["width"] and r["y"] <= y <= r["y"] + r["height"]

    def __repr__(self) -> str:
        ident = f"#{self.element_id}" if self.element_id else ""
        return f"<{self.tag}{ident}>"


class MemoryHost:
    """HostEnvironment implementation over a :class:`MemoryNode` tree."""

    def __init__(self, root: Optional[MemoryNode] = None):
        self.root = root or MemoryNode("html")

    # ── Animation queries ─────────────────────────────────────────

    def list_animations(self, node: Optional[MemoryNode] = None) -> List[MemoryAnimation]:
        start = node if node is not None else self.root
        found: List[MemoryAnimation] = []
        for n in start.walk():
            found.extend(n.animations)
        return found

    # ── Style / geometry ──────────────────────────────────────────

    def computed_style(self, node: MemoryNode) -> Mapping[str, str]:
        return dict(node.style)

    def bounding_rect(self, node: MemoryNode) -> Mapping[str, float]:
        return dict(node.rect)

    def tag_name(self, node: MemoryNode) -> str:
        return node.tag

    def get_attribute(self, node: MemoryNode, name: str) -> Optional[str]:
        return node.attributes.get(name)

    def inner_markup(self, node: MemoryNode) -> Optional[str]:
        return node.markup

    def source_metadata(self, node: MemoryNode) -> Optional[Mapping[str, Any]]:
        return node.source

    def node_at(self, x: float, y: float) -> Optional[MemoryNode]:
        hit = None
        for n in self.root.walk():
            if n is not self.root and n.hit_testable and n.contains_point(x, y):
                hit = n
        return hit

    # ── Lookup / mounting ─────────────────────────────────────────

    def find(self, element_id: str) -> Optional[MemoryNode]:
        for n in self.root.walk():
            if n.element_id == element_id:
                return n
        return None

    def has_element(self, element_id: str) -> bool:
        return self.find(element_id) is not None

    def create_element(self, element_id: str) -> MemoryNode:
        """Append the overlay host element; it never takes part in hit testing."""
        node = MemoryNode("div", attributes={"id": element_id})
        node.hit_testable = False
        return self.root.append(node)


def load_scene(path: Union[str, Path]) -> MemoryHost:
    """Load a JSON scene description into a :class:`MemoryHost`.

    Raises:
        SceneError: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SceneError(path, "file not found")
    except (OSError, json.JSONDecodeError) as e:
        raise SceneError(path, str(e))
    return build_host(data, source=str(path))


def build_host(data: Mapping[str, Any], source: str = "<scene>") -> MemoryHost:
    """Build a host from an already-parsed scene mapping."""
    if not isinstance(data, Mapping):
        raise SceneError(source, "top level must be an object")
    nodes = data.get("nodes", [])
    if not isinstance(nodes, list):
        raise SceneError(source, "'nodes' must be a list")

    host = MemoryHost()
    for i, node_data in enumerate(nodes):
        host.root.append(_build_node(node_data, source, f"nodes[{i}]"))
    logger.debug(
        "Loaded scene %s: %d nodes, %d animations",
        source,
        sum(1 for _ in host.root.walk()) - 1,
        len(host.list_animations()),
    )
    return host


def _build_node(node_data: Any, source: str, where: str) -> MemoryNode:
    if not isinstance(node_data, Mapping):
        raise SceneError(source, f"{where} must be an object")
    tag = node_data.get("tag")
    if not isinstance(tag, str) or not tag:
        raise SceneError(source, f"{where}.tag is required")

    raw_attributes = _optional_mapping(node_data, "attributes", source, where)
    attributes = {str(k): str(v) for k, v in raw_attributes.items()}
    if node_data.get("id") is not None:
        attributes["id"] = str(node_data["id"])
    if node_data.get("class") is not None:
        attributes["class"] = str(node_data["class"])
    if node_data.get("d") is not None:
        attributes["d"] = str(node_data["d"])

    animations = []
    for k, anim_data in enumerate(_optional_list(node_data, "animations", source, where)):
        anim_where = f"{where}.animations[{k}]"
        if not isinstance(anim_data, Mapping):
            raise SceneError(source, f"{anim_where} must be an object")
        try:
            animations.append(_build_animation(anim_data))
        except (TypeError, ValueError) as e:
            raise SceneError(source, f"{anim_where}: {e}")

    style = _optional_mapping(node_data, "style", source, where)
    rect = node_data.get("rect")
    if rect is not None and not isinstance(rect, Mapping):
        raise SceneError(source, f"{where}.rect must be an object")

    try:
        node = MemoryNode(
            tag,
            attributes=attributes,
            style={str(k): str(v) for k, v in style.items()},
            rect=rect,
            animations=animations,
            source=node_data.get("source"),
            markup=node_data.get("markup"),
        )
    except (TypeError, ValueError) as e:
        raise SceneError(source, f"{where}: {e}")

    for j, child in enumerate(_optional_list(node_data, "children", source, where)):
        node.append(_build_node(child, source, f"{where}.children[{j}]"))
    return node


def _optional_mapping(node_data: Mapping[str, Any], key: str, source: str, where: str) -> Mapping:
    value = node_data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SceneError(source, f"{where}.{key} must be an object")
    return value


def _optional_list(node_data: Mapping[str, Any], key: str, source: str, where: str) -> List[Any]:
    value = node_data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SceneError(source, f"{where}.{key} must be a list")
    return value


def _build_animation(anim_data: Mapping[str, Any]) -> MemoryAnimation:
    current_time = anim_data.get("current_time", 0.0)
    progress = anim_data.get("progress")
    return MemoryAnimation(
        name=anim_data.get("name"),
        anim_id=anim_data.get("id"),
        play_state=anim_data.get("play_state", "running"),
        current_time=float(current_time) if current_time is not None else None,
        duration=anim_data.get("duration"),
        progress=float(progress) if progress is not None else None,
        phase=anim_data.get("phase"),
        easing=anim_data.get("easing", "linear"),
    )
