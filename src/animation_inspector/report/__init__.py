"""Report generation for committed annotations."""

from .markdown import (
    DEFAULT_TITLE,
    UNSET_SENTINELS,
    element_identity,
    format_sample,
    pluralize,
    render_all,
    render_entry,
    to_kebab_case,
)

__all__ = [
    "DEFAULT_TITLE",
    "UNSET_SENTINELS",
    "element_identity",
    "format_sample",
    "pluralize",
    "render_all",
    "render_entry",
    "to_kebab_case",
]
