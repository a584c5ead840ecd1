"""Configuration loading and management for Animation Inspector.

Configuration sources are merged in priority order:
    1. Defaults (defined in InspectorConfig)
    2. Global config (~/.animation-inspector.toml)
    3. Project config (./animation-inspector.toml)
    4. Explicit config file
    5. Environment variables (ANIMATION_INSPECTOR_* prefix)
    6. Overrides (passed as kwargs, typically CLI flags)

Example:
    >>> config = load_config(mode="single", verbose=True)
    >>> config.mode
    'single'
    >>> config.verbosity
    'verbose'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
Mode = Literal["single", "multi"]

ENV_PREFIX = "ANIMATION_INSPECTOR_"
CONFIG_FILENAME = "animation-inspector.toml"

_MODES = ("single", "multi")
_CLIPBOARDS = ("system", "file", "memory")
_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class InspectorConfig:
    """Configuration for one mounted overlay.

    Attributes:
        Engine behaviour:
            mode: "single" copies each committed annotation immediately and
                keeps at most one; "multi" accumulates annotations for a
                batch copy.
            host_element_id: Id of the element the overlay mounts into.

        Export:
            clipboard: Clipboard sink ("system", "file" or "memory")
            clipboard_file: Target path for the "file" sink
            async_clipboard: Write the clipboard on a background thread
            report_title: Heading of the batch report

        Output control:
            verbosity: Logging verbosity level
    """

    mode: Mode = "multi"
    host_element_id: str = "animation-inspector-host"

    clipboard: str = "system"
    clipboard_file: str = "animation-feedback.md"
    async_clipboard: bool = True
    report_title: str = "Animation Feedback Report"

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.mode not in _MODES:
            raise InvalidConfigError("mode", self.mode, f"expected one of {', '.join(_MODES)}")
        if self.clipboard not in _CLIPBOARDS:
            raise InvalidConfigError(
                "clipboard", self.clipboard, f"expected one of {', '.join(_CLIPBOARDS)}"
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )
        if not self.host_element_id.strip():
            raise InvalidConfigError("host_element_id", self.host_element_id, "must not be empty")
        if not self.report_title.strip():
            raise InvalidConfigError("report_title", self.report_title, "must not be empty")
        if self.clipboard == "file" and not self.clipboard_file:
            raise InvalidConfigError(
                "clipboard_file", self.clipboard_file, "required when clipboard is 'file'"
            )

    @property
    def is_single_shot(self) -> bool:
        return self.mode == "single"


def load_config(config_file: Optional[Path] = None, **overrides) -> InspectorConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so optional CLI flags can be passed through.

    Returns:
        Validated InspectorConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Verbosity boolean flags map onto the verbosity field
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return InspectorConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def config_as_dict(config: InspectorConfig) -> dict[str, Any]:
    """Flatten a config into an ordered dict of field name -> value."""
    return {f.name: getattr(config, f.name) for f in fields(config)}


def _read_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")
    # Settings may live at top level or under an [inspector] table
    section = data.get("inspector", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid {label} '{path}': [inspector] must be a table")
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ANIMATION_INSPECTOR_* environment variables.

    Supported environment variables:
        ANIMATION_INSPECTOR_MODE: single/multi
        ANIMATION_INSPECTOR_HOST_ELEMENT_ID: str
        ANIMATION_INSPECTOR_CLIPBOARD: system/file/memory
        ANIMATION_INSPECTOR_CLIPBOARD_FILE: str
        ANIMATION_INSPECTOR_ASYNC_CLIPBOARD: bool (true/false/1/0)
        ANIMATION_INSPECTOR_REPORT_TITLE: str
        ANIMATION_INSPECTOR_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(InspectorConfig)
    result: dict[str, Any] = {}

    for field_name in InspectorConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints.get(field_name))
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like Mode and Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or the 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)


default_config = InspectorConfig()
