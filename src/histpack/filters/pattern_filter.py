"""Glob-pattern based path filter."""

import re
from typing import Iterable

DEFAULT_INCLUDE = (
    # Source code
    "*.cs", "*.vb", "*.xaml", "*.xaml.cs", "*.razor", "*.razor.cs", "*.py", "*.sql",
    # Project and config files
    "*.csproj", "*.vbproj", "*.sln", "app.config", "web.config", "*.json",
    "*.toml", "*.yaml", "*.yml",
    # Documentation
    "README.md", "CHANGELOG.md", "*.md",
    # Scripts
    "*.ps1", "*.sh", "*.bat", "*.cmd",
    # Web files
    "*.html", "*.css", "*.js", "*.ts", "*.jsx", "*.tsx",
)

DEFAULT_EXCLUDE = (
    # Binaries and executables
    "*.exe", "*.dll", "*.pdb", "*.obj", "*.bin", "*.pyc",
    # Build outputs
    "bin/*", "obj/*", "**/bin/**", "**/obj/**", "__pycache__/*",
    # Generated code
    "*.designer.cs", "*.generated.cs", "*.g.cs", "*.g.i.cs",
    # Source control and IDE folders
    ".git/*", ".github/*", ".vs/*",
    # Media assets
    "*.jpg", "*.jpeg", "*.png", "*.gif", "*.bmp", "*.ico", "*.svg",
    # Office documents
    "*.doc", "*.docx", "*.xls", "*.xlsx", "*.ppt", "*.pptx", "*.pdf",
    # Archives
    "*.zip", "*.rar", "*.7z", "*.tar", "*.gz",
)


def glob_to_regex(pattern: str) -> re.Pattern:
    """Compile a glob into an unanchored, case-insensitive regex.

    ``**`` matches across directories, ``*`` and ``?`` stay within one
    path segment.
    """
    escaped = (
        re.escape(pattern)
        .replace(r"\*\*", ".*")
        .replace(r"\*", "[^/]*")
        .replace(r"\?", "[^/]")
    )
    return re.compile(escaped, re.IGNORECASE)


class PatternPathFilter:
    """Path filter driven by include and exclude glob lists.

    Exclusions are checked first; a path is kept only if it then matches
    at least one inclusion.
    """

    def __init__(self, include: Iterable[str], exclude: Iterable[str] = ()):
        self._include = [glob_to_regex(p) for p in include]
        self._exclude = [glob_to_regex(p) for p in exclude]

    def should_include(self, path: str) -> bool:
        path = path.replace("\\", "/")

        if any(pattern.search(path) for pattern in self._exclude):
            return False
        return any(pattern.search(path) for pattern in self._include)


def default_path_filter() -> PatternPathFilter:
    """Filter keeping source, config, docs and scripts; dropping binaries and build output."""
    return PatternPathFilter(DEFAULT_INCLUDE, DEFAULT_EXCLUDE)
