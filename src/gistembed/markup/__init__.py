"""Post-processing of rendered gist markup."""

from gistembed.markup.selector import (
    HIGHLIGHT_CLASS,
    sanitise_file_name,
    select_lines,
    selector_prefix,
)
from gistembed.markup.shrinker import ATTRIBUTION, SHRINK_RULES, shrink_markup

__all__ = [
    "ATTRIBUTION",
    "HIGHLIGHT_CLASS",
    "SHRINK_RULES",
    "sanitise_file_name",
    "select_lines",
    "selector_prefix",
    "shrink_markup",
]
