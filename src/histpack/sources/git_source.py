"""Commit source backed by a local Git repository (GitPython)."""

import logging
import re
from pathlib import Path
from typing import Iterator, Optional

import git
from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from histpack.exceptions import SourceError
from histpack.models import Change, ChangeKind, Commit
from histpack.protocols import PathFilter
from histpack.utils import decode_text, detect_binary, is_binary_extension, language_for_path

logger = logging.getLogger(__name__)

# GitPython change_type letters
_KIND_MAP = {
    "A": ChangeKind.ADDED,
    "D": ChangeKind.DELETED,
    "M": ChangeKind.MODIFIED,
    "R": ChangeKind.MODIFIED,  # a rename is still a modification
}


def change_kind(diff: git.Diff) -> ChangeKind:
    """Map a GitPython diff to a change kind.

    Patch-format diffs leave ``change_type`` unset, so the flags are checked first.
    """
    if diff.new_file:
        return ChangeKind.ADDED
    if diff.deleted_file:
        return ChangeKind.DELETED
    if diff.renamed_file:
        return ChangeKind.MODIFIED
    if diff.copied_file:
        return ChangeKind.OTHER
    if diff.change_type:
        return _KIND_MAP.get(diff.change_type, ChangeKind.OTHER)
    return ChangeKind.MODIFIED


def author_regex(pattern: str) -> re.Pattern:
    """Compile an author pattern.

    Patterns containing ``*`` or ``?`` are anchored globs; anything else is
    a substring match. Matching is case-insensitive either way.
    """
    if "*" in pattern or "?" in pattern:
        body = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
        return re.compile(f"^{body}$", re.IGNORECASE)
    return re.compile(re.escape(pattern), re.IGNORECASE)


def read_blob(blob: Optional[git.Blob]) -> Optional[str]:
    """Return blob text, or None for missing or binary blobs."""
    if blob is None:
        return None
    data = blob.data_stream.read()
    if detect_binary(blob.path, data):
        return None
    return decode_text(data)


class GitCommitSource:
    """Reads commits and their file changes from a Git repository.

    Commits are yielded oldest first (by author date). Changes are diffed
    against the first parent; merge commits carry no content.
    """

    source_type = "git"

    def __init__(self, repo_path: Path | str, context_lines: int = 3):
        self.repo_path = Path(repo_path)
        self.context_lines = context_lines
        try:
            self.repo = Repo(self.repo_path)
        except NoSuchPathError:
            raise SourceError(f"Repository path does not exist: {repo_path}")
        except InvalidGitRepositoryError:
            raise SourceError(f"Not a valid Git repository: {repo_path}")

    @staticmethod
    def can_handle(location: Path | str) -> bool:
        """Check if ``location`` looks like a Git working tree or bare repository."""
        path = Path(location)
        return (path / ".git").exists() or (path / "HEAD").is_file()

    def close(self) -> None:
        self.repo.close()

    def __enter__(self) -> "GitCommitSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _iter_commits(self) -> Iterator[git.Commit]:
        if not self.repo.head.is_valid():
            return
        try:
            yield from self.repo.iter_commits("HEAD")
        except GitCommandError as e:
            raise SourceError(f"Failed to read commit history: {e}")

    def _matches(self, regex: re.Pattern, commit: git.Commit) -> bool:
        author = commit.author
        return bool(regex.search(author.name or "") or regex.search(author.email or ""))

    def total_commit_count(self) -> int:
        return sum(1 for _ in self._iter_commits())

    def matching_commit_count(self, author_pattern: str) -> int:
        regex = author_regex(author_pattern)
        return sum(1 for c in self._iter_commits() if self._matches(regex, c))

    def fetch(self, author_pattern: str, path_filter: PathFilter) -> Iterator[Commit]:
        """Yield matching commits oldest first, building each one lazily."""
        regex = author_regex(author_pattern)
        matching = [c for c in self._iter_commits() if self._matches(regex, c)]
        matching.sort(key=lambda c: c.authored_datetime)

        for raw in matching:
            is_merge = len(raw.parents) > 1
            changes = tuple(self._changes(raw, path_filter, is_merge))
            logger.debug(f"Fetched {raw.hexsha[:8]} ({len(changes)} changes)")

            yield Commit.from_raw_message(
                hash=raw.hexsha,
                date=raw.authored_datetime,
                author=raw.author.name or "",
                raw_message=raw.message or "",
                is_merge=is_merge,
                changes=changes,
            )

    def _changes(
        self, commit: git.Commit, path_filter: PathFilter, is_merge: bool
    ) -> Iterator[Change]:
        if not commit.parents:
            # Root commit: every file in the tree is added
            for item in commit.tree.traverse():
                if item.type != "blob" or not path_filter.should_include(item.path):
                    continue
                yield Change(
                    kind=ChangeKind.ADDED,
                    path=item.path,
                    content=read_blob(item),
                    language=language_for_path(item.path),
                )
            return

        parent = commit.parents[0]
        try:
            if is_merge:
                diffs = parent.diff(commit)
            else:
                diffs = parent.diff(commit, create_patch=True, unified=self.context_lines)
        except GitCommandError as e:
            raise SourceError(f"Failed to diff {commit.hexsha[:8]}: {e}")

        for diff in diffs:
            path = diff.b_path or diff.a_path or ""
            if not path_filter.should_include(path):
                continue

            kind = change_kind(diff)
            old_path = diff.a_path if diff.renamed_file else None

            content = None
            if not is_merge:
                if kind == ChangeKind.ADDED:
                    content = read_blob(diff.b_blob)
                elif kind == ChangeKind.DELETED:
                    content = read_blob(diff.a_blob)
                elif kind == ChangeKind.MODIFIED:
                    content = self._patch_text(path, diff)

            yield Change(
                kind=kind,
                path=path,
                old_path=old_path,
                content=content,
                language=language_for_path(path),
            )

    def _patch_text(self, path: str, diff: git.Diff) -> Optional[str]:
        if is_binary_extension(path) or not diff.diff:
            return None
        patch = diff.diff if isinstance(diff.diff, bytes) else diff.diff.encode("utf-8")
        text = decode_text(patch)
        if text.startswith("Binary files"):
            return None
        return text
