"""Markdown rendering of a single commit."""

from histpack.formatting.truncate import MAX_LINES, truncate, truncate_lines
from histpack.models import Change, ChangeKind, Commit, FormattingOptions

MAX_CONTENT_CHARS = 5000
NO_CHANGES = "*No changes in this commit.*"


class MarkdownRenderer:
    """Renders commits as self-contained Markdown fragments.

    Changes are grouped as Added, Deleted, Modified/Renamed and Other.
    Within each group, changes with content get their own sub-section and
    the rest are listed under "Others", sorted by path.
    """

    def render(self, commit: Commit, options: FormattingOptions) -> str:
        lines = [f"## {commit.short_hash} ({commit.date:%Y-%m-%d})", "", commit.title]

        if commit.description:
            lines += ["", commit.description]

        lines.append("")
        header = _join(lines)

        if commit.has_changes:
            return header + self.render_changes(commit, options)
        return header + _join([NO_CHANGES, ""])

    def render_changes(self, commit: Commit, options: FormattingOptions) -> str:
        if commit.is_merge and not options.show_merge_commit_content:
            lines = ["### Merge Commit", "", "*Affected files:*", ""]
            lines += [f"- {change.path}" for change in _by_path(commit.changes)]
            lines.append("")
            return _join(lines)

        groups: dict[ChangeKind, list[Change]] = {kind: [] for kind in ChangeKind}
        for change in commit.changes:
            groups[change.kind].append(change)

        lines: list[str] = []
        if groups[ChangeKind.ADDED]:
            lines += self._added(groups[ChangeKind.ADDED])
        if groups[ChangeKind.DELETED]:
            lines += self._deleted(groups[ChangeKind.DELETED])
        if groups[ChangeKind.MODIFIED]:
            lines += self._modified(groups[ChangeKind.MODIFIED])
        if groups[ChangeKind.OTHER]:
            lines += ["### Other Changes:", ""]
            lines += [
                f"- {change.kind.value} {change.path}"
                for change in _by_path(groups[ChangeKind.OTHER])
            ]
            lines.append("")

        return _join(lines)

    def _added(self, changes: list[Change]) -> list[str]:
        lines = ["### Added:", ""]
        for change in changes:
            if not change.has_content:
                continue
            lines += [
                f"#### {change.path}",
                "",
                f"```{change.language or ''}",
                truncate(change.content, MAX_CONTENT_CHARS),
                "```",
                "",
            ]
        lines += _others(changes, lambda c: c.path)
        return lines

    def _deleted(self, changes: list[Change]) -> list[str]:
        lines = ["### Deleted:", ""]
        for change in changes:
            if not change.has_content:
                continue
            lines += [f"#### {change.path}", "", "```diff"]
            # Line cap only: deleted files are never cut by characters.
            body = truncate_lines(change.content.split("\n"), MAX_LINES)
            lines += [f"-{line}" for line in body]
            lines += ["```", ""]
        lines += _others(changes, lambda c: c.path)
        return lines

    def _modified(self, changes: list[Change]) -> list[str]:
        lines = ["### Modified/Renamed:", ""]
        for change in changes:
            if not change.has_content:
                continue
            lines += [f"#### {change.path}", "", "```diff"]
            if change.is_rename:
                lines += [
                    "similarity index 98%",
                    f"rename from {change.old_path}",
                    f"rename to {change.path}",
                ]
            body = truncate(change.content, MAX_CONTENT_CHARS)
            lines += [body[:-1] if body.endswith("\n") else body, "```", ""]
        lines += _others(
            changes,
            lambda c: f"{c.path} (from {c.old_path})" if c.is_rename else c.path,
        )
        return lines


def _others(changes, describe) -> list[str]:
    rest = [c for c in changes if not c.has_content]
    if not rest:
        return []
    return ["#### Others", ""] + [f"- {describe(c)}" for c in _by_path(rest)] + [""]


def _by_path(changes) -> list[Change]:
    return sorted(changes, key=lambda c: c.path)


def _join(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)
