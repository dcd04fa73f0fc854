"""Extract a repository's history for one author into paginated Markdown."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from histpack.filters import default_path_filter
from histpack.formatting import MarkdownRenderer
from histpack.models import (
    ExtractionProgress,
    ExtractionResult,
    FormattingOptions,
    GenerationProgress,
)
from histpack.output import MarkdownPaginator
from histpack.protocols import CommitSource, PathFilter, Renderer

logger = logging.getLogger(__name__)


class HistoryExtractor:
    """Wires a commit source, path filter, renderer and paginator together.

    Use as a context manager so the source is closed when done:

        with HistoryExtractor(GitCommitSource(path)) as extractor:
            result = extractor.extract("alice", "out/")
    """

    def __init__(
        self,
        source: CommitSource,
        path_filter: Optional[PathFilter] = None,
        renderer: Optional[Renderer] = None,
        options: Optional[FormattingOptions] = None,
    ):
        self.source = source
        self.path_filter = path_filter or default_path_filter()
        self.renderer = renderer or MarkdownRenderer()
        self.options = options or FormattingOptions()
        self.paginator = MarkdownPaginator(self.renderer, self.options)
        # Each count walks the whole history, so results are kept per extractor
        self._total_count: Optional[int] = None
        self._matching_counts: dict[str, int] = {}

    def close(self) -> None:
        self.source.close()

    def __enter__(self) -> "HistoryExtractor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def total_commit_count(self) -> int:
        if self._total_count is None:
            self._total_count = self.source.total_commit_count()
        return self._total_count

    def matching_commit_count(self, author_pattern: str) -> int:
        if author_pattern not in self._matching_counts:
            self._matching_counts[author_pattern] = self.source.matching_commit_count(
                author_pattern
            )
        return self._matching_counts[author_pattern]

    def extract(
        self,
        author_pattern: str,
        output_directory: Path | str,
        progress_callback: Optional[Callable[[ExtractionProgress], None]] = None,
    ) -> ExtractionResult:
        """Write matching commits to part files under ``output_directory``.

        The callback receives an initial report, one report per written
        commit, and a final report with ``is_complete`` set.
        """
        Path(output_directory).mkdir(parents=True, exist_ok=True)

        total = self.total_commit_count()
        matching = self.matching_commit_count(author_pattern)
        start_time = datetime.now()
        processed = 0
        generated = 0

        def report(current_file: Optional[str] = None, complete: bool = False) -> None:
            if progress_callback:
                progress_callback(
                    ExtractionProgress(
                        total_commits=total,
                        matching_commits=matching,
                        processed_commits=processed,
                        generated_files=generated,
                        start_time=start_time,
                        current_time=datetime.now(),
                        current_file_path=current_file,
                        is_complete=complete,
                    )
                )

        def on_generation(progress: GenerationProgress) -> None:
            nonlocal processed, generated
            processed = progress.processed_commits
            generated = progress.generated_files
            report(progress.current_file_path)

        report()
        logger.debug(f"Extracting commits matching '{author_pattern}' ({matching}/{total})")

        commits = self.source.fetch(author_pattern, self.path_filter)
        paths = self.paginator.generate(commits, output_directory, on_generation)

        end_time = datetime.now()
        result = ExtractionResult(
            total_commits=total,
            matching_commits=matching,
            generated_files=len(paths),
            generated_file_paths=tuple(paths),
            start_time=start_time,
            end_time=end_time,
        )
        generated = len(paths)
        report(complete=True)

        logger.info(
            f"Extracted {processed} commits into {len(paths)} files "
            f"in {result.elapsed.total_seconds():.2f}s"
        )
        return result
