"""Host integration errors: overlay mounting, scene descriptions, clipboard."""

from pathlib import Path
from typing import Union

from .base import InspectorError


class HostError(InspectorError):
    """Base class for errors raised by the host integration layer."""

    pass


class DuplicateMountError(HostError):
    """Raised when the overlay host element is installed twice.

    This always indicates a double-initialization bug in the hosting
    integration and is never recovered from.
    """

    def __init__(self, element_id: str):
        super().__init__(
            f"{element_id} element already exists",
            details={"element_id": element_id},
        )
        self.element_id = element_id


class SceneError(HostError):
    """Raised when a scene description cannot be loaded."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Invalid scene: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class ClipboardError(HostError):
    """Raised by a clipboard sink when the text could not be written."""

    def __init__(self, backend: str, reason: str):
        super().__init__(
            f"Clipboard write failed ({backend})",
            details={"backend": backend, "reason": reason},
        )
        self.backend = backend
        self.reason = reason
