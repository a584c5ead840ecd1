"""
Logging setup for Animation Inspector.

The engine itself only logs through named loggers below ``animation_inspector``;
handlers are installed by whoever drives it (the CLI, or a host integration)
through :func:`setup_logging`.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "animation_inspector"

# Config verbosity -> level of the animation_inspector logger
VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route inspector logs to stderr through rich, and optionally to a file.

    Args:
        verbosity: "quiet", "normal" or "verbose", as in ``InspectorConfig``
        log_file: Optional file path; appended to in plain text

    Returns:
        The ``animation_inspector`` logger, set to the requested level

    Raises:
        ValueError: If verbosity is not a known level
    """
    try:
        level = VERBOSITY_LEVELS[verbosity]
    except KeyError:
        raise ValueError(
            f"Unknown verbosity: {verbosity!r}. Choose from: {', '.join(VERBOSITY_LEVELS)}"
        )
    verbose = level == logging.DEBUG

    # Snapshot reprs and user notes may contain [brackets]; never treat them as markup
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the ``animation_inspector`` namespace.

    ``get_logger(__name__)`` inside the package returns the module logger
    unchanged; other names (``"host.browser"``) are prefixed so that
    :func:`setup_logging` levels apply to them too.
    """
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
