"""Core data models for commits and their file changes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ChangeKind(str, Enum):
    """Kind of change made to a file in a commit."""

    ADDED = "Added"
    DELETED = "Deleted"
    MODIFIED = "Modified"
    OTHER = "Other"


@dataclass(frozen=True)
class Change:
    """A single file change within a commit."""

    kind: ChangeKind
    path: str
    old_path: Optional[str] = None  # only set for renames
    content: Optional[str] = None  # None for binary or suppressed content
    language: str = ""

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def is_rename(self) -> bool:
        return (
            self.kind == ChangeKind.MODIFIED
            and bool(self.old_path)
            and self.old_path != self.path
        )


@dataclass(frozen=True)
class Commit:
    """A commit with its metadata and filtered changes."""

    hash: str
    short_hash: str
    date: datetime
    author: str
    message: str
    description: Optional[str] = None
    is_merge: bool = False
    changes: tuple[Change, ...] = field(default_factory=tuple)

    @property
    def title(self) -> str:
        """First line of the message, trimmed."""
        return self.message.split("\n")[0].strip()

    @property
    def has_changes(self) -> bool:
        return len(self.changes) > 0

    @classmethod
    def from_raw_message(
        cls,
        hash: str,
        date: datetime,
        author: str,
        raw_message: str,
        is_merge: bool = False,
        changes: tuple[Change, ...] = (),
    ) -> "Commit":
        """Build a commit, splitting a raw message into title and body.

        The body is only set when the message has more than one non-empty line.
        """
        message = raw_message or ""
        description = None

        parts = message.replace("\r", "\n").split("\n", 1)
        first = parts[0].strip()
        rest = parts[1].strip() if len(parts) > 1 else ""
        if not first and rest:
            # Leading blank lines: the first non-empty line is the title.
            first, _, rest = rest.partition("\n")
            first, rest = first.strip(), rest.strip()
        if rest:
            message = first
            description = rest
        else:
            message = first

        return cls(
            hash=hash,
            short_hash=hash[:8],
            date=date,
            author=author,
            message=message,
            description=description,
            is_merge=is_merge,
            changes=tuple(changes),
        )
