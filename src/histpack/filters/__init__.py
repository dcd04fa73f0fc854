"""Path relevance filters."""

from histpack.filters.pattern_filter import (
    DEFAULT_EXCLUDE,
    DEFAULT_INCLUDE,
    PatternPathFilter,
    default_path_filter,
    glob_to_regex,
)

__all__ = [
    "DEFAULT_EXCLUDE",
    "DEFAULT_INCLUDE",
    "PatternPathFilter",
    "default_path_filter",
    "glob_to_regex",
]
