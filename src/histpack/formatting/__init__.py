"""Commit rendering and content truncation."""

from histpack.formatting.markdown_renderer import MarkdownRenderer
from histpack.formatting.truncate import TRUNCATION_MARKER, truncate, truncate_lines

__all__ = ["MarkdownRenderer", "TRUNCATION_MARKER", "truncate", "truncate_lines"]
