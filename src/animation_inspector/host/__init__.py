"""Host integration: capability protocols, in-memory host and mounting."""

from .memory import MemoryAnimation, MemoryHost, MemoryNode, build_host, load_scene
from .protocols import AnimationLike, EffectTiming, HostEnvironment, NodeRef

__all__ = [
    "AnimationLike",
    "EffectTiming",
    "HostEnvironment",
    "NodeRef",
    "MemoryAnimation",
    "MemoryHost",
    "MemoryNode",
    "build_host",
    "load_scene",
]
