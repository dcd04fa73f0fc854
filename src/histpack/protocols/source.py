"""Protocol for commit sources."""

from typing import Iterator, Protocol, runtime_checkable

from histpack.models import Commit
from histpack.protocols.path_filter import PathFilter


@runtime_checkable
class CommitSource(Protocol):
    """Protocol for version-control backends.

    Implementations retrieve commits, compute diffs and decode blobs.
    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this backend (e.g., 'git')."""
        ...

    def total_commit_count(self) -> int:
        """Return the number of commits in the repository."""
        ...

    def matching_commit_count(self, author_pattern: str) -> int:
        """Return the number of commits whose author matches the pattern."""
        ...

    def fetch(self, author_pattern: str, path_filter: PathFilter) -> Iterator[Commit]:
        """Yield matching commits, oldest first.

        Changes are already filtered through ``path_filter``; binary
        content is yielded as ``None``.
        """
        ...

    def close(self) -> None:
        """Release any handle on the underlying repository."""
        ...
