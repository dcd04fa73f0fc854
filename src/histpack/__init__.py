"""histpack - Git history to size-capped Markdown."""

__version__ = "0.1.0"
