"""Clipboard sinks and fire-and-forget copy tasks.

A sink accepts a text blob and reports whether it was written. The engine
never waits on a copy: :func:`start_copy` captures the text by value and
hands it to a background thread, and the caller only learns about the
outcome through the returned :class:`ClipboardTask`.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
import threading
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence, Union

from .exceptions import ClipboardError
from .logging_config import get_logger

logger = get_logger(__name__)

# Clipboard commands tried in order, per platform
_COMMANDS: dict[str, List[Sequence[str]]] = {
    "darwin": [("pbcopy",)],
    "win32": [("clip.exe",), ("clip",)],
    "linux": [
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
    ],
}


class ClipboardSink(Protocol):
    """Anything that can accept report text."""

    def write(self, text: str) -> bool:
        ...


class SystemClipboard:
    """Write to the OS clipboard through the platform's clipboard command."""

    name = "system"

    def __init__(self, timeout: float = 5.0, platform: Optional[str] = None):
        self.timeout = timeout
        self.platform = platform or sys.platform

    def _command(self) -> Sequence[str]:
        key = "linux" if self.platform.startswith("linux") else self.platform
        for command in _COMMANDS.get(key, []):
            if shutil.which(command[0]):
                return command
        raise ClipboardError(self.name, f"no clipboard command available on {self.platform}")

    def write(self, text: str) -> bool:
        command = self._command()
        try:
            result = subprocess.run(
                list(command),
                input=text,
                text=True,
                capture_output=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
            raise ClipboardError(self.name, str(e))
        if result.returncode != 0:
            raise ClipboardError(self.name, result.stderr.strip() or f"exit {result.returncode}")
        return True


class FileClipboard:
    """Write the text to a file instead of the clipboard."""

    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def write(self, text: str) -> bool:
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ClipboardError(self.name, str(e))
        return True


class MemoryClipboard:
    """Keep copied text in memory; handy for tests and headless runs."""

    name = "memory"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.history: List[str] = []

    @property
    def text(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def write(self, text: str) -> bool:
        if self.fail:
            return False
        self.history.append(text)
        return True


def get_clipboard(name: str, clipboard_file: Optional[str] = None) -> ClipboardSink:
    """Get a clipboard sink by name ("system", "file" or "memory")."""
    if name == "system":
        return SystemClipboard()
    if name == "file":
        return FileClipboard(clipboard_file or "animation-feedback.md")
    if name == "memory":
        return MemoryClipboard()
    raise ValueError(f"Unknown clipboard: {name!r}. Choose from: file, memory, system")


class ClipboardTask:
    """Outcome of one copy request."""

    def __init__(self, text: str):
        self.text = text
        self.succeeded: Optional[bool] = None
        self._done = threading.Event()

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the write finished; returns whether it succeeded."""
        self._done.wait(timeout)
        return bool(self.succeeded)

    def _finish(self, succeeded: bool) -> None:
        self.succeeded = succeeded
        self._done.set()


def start_copy(
    sink: ClipboardSink,
    text: str,
    on_done: Optional[Callable[[ClipboardTask], None]] = None,
    background: bool = True,
) -> ClipboardTask:
    """Write ``text`` to ``sink``, on a daemon thread when ``background``.

    Failures never raise; they are logged and reported as ``succeeded=False``.
    """
    task = ClipboardTask(text)

    def _do_copy() -> None:
        try:
            ok = bool(sink.write(text))
        except ClipboardError as e:
            logger.warning("Copy failed: %s", e)
            ok = False
        except Exception:
            logger.exception("Unexpected error while writing to the clipboard")
            ok = False
        task.succeeded = ok
        try:
            if on_done is not None:
                on_done(task)
        except Exception:
            logger.exception("Copy completion callback failed")
        finally:
            task._finish(ok)

    if background:
        threading.Thread(target=_do_copy, name="clipboard-copy", daemon=True).start()
    else:
        _do_copy()
    return task
