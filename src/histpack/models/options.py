"""Formatting options shared by the renderer and the paginator."""

from dataclasses import dataclass

from histpack.exceptions import ConfigurationError


@dataclass(frozen=True)
class FormattingOptions:
    """Options controlling rendering and output file size."""

    max_characters_per_file: int = 700_000
    content_threshold_fraction: float = 0.9
    context_lines: int = 3  # consumed by the commit source when diffing
    show_merge_commit_content: bool = False

    def __post_init__(self) -> None:
        if self.max_characters_per_file <= 0:
            raise ConfigurationError(
                f"max_characters_per_file must be positive, got {self.max_characters_per_file}"
            )
        if not 0 < self.content_threshold_fraction <= 1:
            raise ConfigurationError(
                "content_threshold_fraction must be in (0, 1], "
                f"got {self.content_threshold_fraction}"
            )
        if self.context_lines < 0:
            raise ConfigurationError(
                f"context_lines must not be negative, got {self.context_lines}"
            )

    @property
    def content_threshold(self) -> int:
        """Characters an output file may hold before rolling over."""
        return int(self.max_characters_per_file * self.content_threshold_fraction)
