"""Paginated Markdown output."""

from histpack.output.paginator import MarkdownPaginator, file_header, output_file_name

__all__ = ["MarkdownPaginator", "file_header", "output_file_name"]
