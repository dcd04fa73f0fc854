"""Commit sources (version-control backends) for histpack."""

from pathlib import Path
from typing import Any, Callable, Optional

from histpack.protocols import CommitSource
from histpack.sources.git_source import GitCommitSource, author_regex

# A factory is anything with ``can_handle(location)`` that, when called with
# the location, returns a CommitSource. Source classes qualify directly.
SourceFactory = Callable[..., CommitSource]

# Registry of available sources
_SOURCES: list[Any] = [
    GitCommitSource,
]


def get_source(location: Path | str, **kwargs) -> Optional[CommitSource]:
    """Open a source that can handle the given location.

    Args:
        location: Path to the repository
        **kwargs: Passed to the source constructor (e.g. ``context_lines``)

    Returns:
        A CommitSource instance, or None if no source handles the location
    """
    for factory in _SOURCES:
        if factory.can_handle(location):
            return factory(location, **kwargs)
    return None


def register_source(factory: SourceFactory) -> None:
    """Register a custom source (for plugins/extensions).

    Args:
        factory: A class or callable with a ``can_handle(location)`` attribute
    """
    _SOURCES.append(factory)


__all__ = ["get_source", "register_source", "GitCommitSource", "author_regex"]
