"""Exception hierarchy for Animation Inspector."""

from .base import InspectorError
from .config import ConfigurationError, InvalidConfigError
from .host import ClipboardError, DuplicateMountError, HostError, SceneError

__all__ = [
    "InspectorError",
    "HostError",
    "DuplicateMountError",
    "SceneError",
    "ClipboardError",
    "ConfigurationError",
    "InvalidConfigError",
]
