"""Map file extensions to code fence language tags."""

from pathlib import PurePosixPath

LANGUAGES = {
    "cs": "csharp",
    "vb": "vb",
    "xaml": "xml",
    "xml": "xml",
    "json": "json",
    "md": "markdown",
    "html": "html",
    "css": "css",
    "js": "javascript",
    "ts": "typescript",
    "jsx": "jsx",
    "tsx": "tsx",
    "ps1": "powershell",
    "sh": "bash",
    "bat": "batch",
    "cmd": "batch",
    "sql": "sql",
    "yaml": "yaml",
    "yml": "yaml",
    "diff": "diff",
    "py": "python",
    "gitignore": "gitignore",
    "gitattributes": "gitattributes",
}


def language_for_path(path: str) -> str:
    """Return the fence language for ``path``, or "" when unknown."""
    name = PurePosixPath(path.replace("\\", "/")).name.lower()
    # Dotfiles like ".gitignore" have no suffix; use the name itself
    if name.startswith(".") and name.count(".") == 1:
        extension = name[1:]
    else:
        extension = PurePosixPath(name).suffix.lstrip(".")
    return LANGUAGES.get(extension, "")
