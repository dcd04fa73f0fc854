"""Deterministic head/tail truncation for long file bodies and diffs."""

from typing import Optional

TRUNCATION_MARKER = "... additional changes truncated ..."
MAX_LINES = 50


def truncate_lines(lines: list[str], max_lines: int = MAX_LINES) -> list[str]:
    """Keep the first and last ``max_lines // 2`` lines around a marker line.

    Lines are returned unchanged when there are no more than ``max_lines``.
    """
    if len(lines) <= max_lines:
        return lines

    half = max_lines // 2
    return lines[:half] + [TRUNCATION_MARKER] + lines[len(lines) - half :]


def truncate(text: Optional[str], max_chars: int) -> str:
    """Shrink text to at most ``max_chars`` characters.

    Text that already fits is returned unchanged. Otherwise the line count
    is capped first (head and tail are kept) and, if a kept line is still
    too long, the result is cut by characters and the marker appended.

    Raises:
        ValueError: if ``text`` is non-empty and ``max_chars`` is smaller
            than the marker itself
    """
    if not text:
        return ""
    if max_chars < len(TRUNCATION_MARKER):
        raise ValueError(
            f"max_chars must be at least {len(TRUNCATION_MARKER)}, got {max_chars}"
        )

    if len(text) <= max_chars:
        return text

    truncated = "\n".join(truncate_lines(text.split("\n")))

    if len(truncated) > max_chars:
        truncated = truncated[: max_chars - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER

    return truncated
