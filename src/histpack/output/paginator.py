"""Size-capped Markdown output spread over sequential part files."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO

from histpack.models import Commit, FormattingOptions, GenerationProgress
from histpack.protocols import Renderer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[GenerationProgress], None]


def output_file_name(start: datetime, end: datetime, sequence: int) -> str:
    """Name of the ``sequence``-th part file for a batch spanning start..end."""
    return f"git-history-{start:%Y-%m-%d}-to-{end:%Y-%m-%d}-part{sequence}.md"


def file_header(start: datetime, end: datetime, total_commits: int, sequence: int) -> str:
    """Header written at the top of every part file."""
    return (
        f"# Git History (Part {sequence})\n"
        "\n"
        f"Period: {start:%Y-%m-%d} to {end:%Y-%m-%d} "
        f"Total commits in this file: {total_commits}\n"
        "\n"
    )


class _PartWriter:
    """Owns the single open part file; closed on every exit path."""

    def __init__(self, directory: Path, start: datetime, end: datetime, total: int):
        self.directory = directory
        self.start = start
        self.end = end
        self.total = total
        self.sequence = 0
        self.char_count = 0
        self.commits_in_file = 0
        self.paths: list[str] = []
        self._handle: Optional[TextIO] = None

    @property
    def current_path(self) -> Optional[str]:
        return self.paths[-1] if self.paths else None

    def open_next(self) -> None:
        """Close the current part (if any) and start the next one."""
        self.close()
        self.sequence += 1
        path = self.directory / output_file_name(self.start, self.end, self.sequence)
        self.paths.append(str(path))
        self._handle = open(path, "w", encoding="utf-8", newline="\n")

        header = file_header(self.start, self.end, self.total, self.sequence)
        self._handle.write(header)
        self.char_count = len(header)
        self.commits_in_file = 0
        logger.debug(f"Opened {path}")

    def write(self, fragment: str) -> None:
        self._handle.write(fragment)
        self.char_count += len(fragment)
        self.commits_in_file += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.flush()
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "_PartWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class MarkdownPaginator:
    """Writes rendered commits into part files bounded by a character threshold.

    Every commit lands whole in exactly one file, in input order. A new part
    is started when the next fragment would push the current file past
    ``options.content_threshold``; a fragment larger than the threshold on
    its own gets a file to itself.
    """

    def __init__(self, renderer: Renderer, options: Optional[FormattingOptions] = None):
        self.renderer = renderer
        self.options = options or FormattingOptions()

    def generate(
        self,
        commits: Iterable[Commit],
        output_directory: Path | str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> list[str]:
        """Render commits into part files and return their paths in order.

        Args:
            commits: Commits ordered oldest first
            output_directory: Directory for the part files (created if missing)
            progress_callback: Called after every written commit

        Returns:
            Paths of the generated files, part 1 first
        """
        directory = Path(output_directory)
        directory.mkdir(parents=True, exist_ok=True)

        # The batch-wide date range goes into every file name and header,
        # so the whole batch is needed before the first file is opened.
        batch = list(commits)
        total = len(batch)

        if total == 0:
            if progress_callback:
                progress_callback(GenerationProgress(0, 0, 0, None))
            return []

        start = min(c.date for c in batch)
        end = max(c.date for c in batch)
        threshold = self.options.content_threshold

        with _PartWriter(directory, start, end, total) as writer:
            writer.open_next()

            for processed, commit in enumerate(batch, 1):
                fragment = self.renderer.render(commit, self.options)

                if (
                    writer.commits_in_file > 0
                    and writer.char_count + len(fragment) > threshold
                ):
                    logger.debug(
                        f"Part {writer.sequence} full at {writer.char_count} chars, rolling over"
                    )
                    writer.open_next()

                writer.write(fragment)

                if progress_callback:
                    progress_callback(
                        GenerationProgress(
                            total_commits=total,
                            processed_commits=processed,
                            generated_files=len(writer.paths),
                            current_file_path=writer.current_path,
                        )
                    )

        return writer.paths
