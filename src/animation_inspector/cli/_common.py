"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional, Tuple, Union

import typer
from rich.console import Console

from ..config import InspectorConfig, load_config
from ..host.memory import MemoryHost, MemoryNode

console = Console()

Target = Union[str, Tuple[float, float]]


def resolve_config(
    config: Optional[Path] = None,
    mode: Optional[str] = None,
    verbose: bool = False,
) -> InspectorConfig:
    """Build a config from CLI options."""
    overrides = {}
    if mode is not None:
        overrides["mode"] = mode
    if verbose:
        overrides["verbose"] = True
    return load_config(config_file=config, **overrides)


def parse_target(text: str) -> Target:
    """``card`` -> element id; ``@120,40`` -> viewport coordinates."""
    text = text.strip()
    if text.startswith("@"):
        try:
            x, y = text[1:].split(",")
            return float(x), float(y)
        except ValueError:
            raise typer.BadParameter(f"Expected @X,Y coordinates, got {text!r}")
    if not text:
        raise typer.BadParameter("Empty target")
    return text


def parse_annotation(text: str) -> Tuple[Target, str]:
    """``TARGET=NOTE``; the note may be empty or omitted."""
    target, _, note = text.partition("=")
    return parse_target(target), note


def find_node(host: MemoryHost, element_id: str) -> MemoryNode:
    node = host.find(element_id)
    if node is None:
        raise typer.BadParameter(f"No element with id {element_id!r} in scene")
    return node
