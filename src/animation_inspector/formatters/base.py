"""Base formatter interface for annotation report output."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..report.markdown import DEFAULT_TITLE
from ..store import AnnotationEntry


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> None:
        """Render entries to the terminal."""

    @abstractmethod
    def format(self, entries: Sequence[AnnotationEntry], title: str = DEFAULT_TITLE) -> str:
        """Return formatted string representation of entries."""
