"""Protocol for path relevance filters."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PathFilter(Protocol):
    """Decides which file paths are worth including in the history."""

    def should_include(self, path: str) -> bool:
        """Return True if changes to ``path`` should be kept."""
        ...
