"""Progress and result values reported during generation and extraction."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class GenerationProgress:
    """Reported by the paginator after each commit is written."""

    total_commits: int
    processed_commits: int
    generated_files: int
    current_file_path: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.processed_commits == self.total_commits

    @property
    def percent_complete(self) -> float:
        if self.total_commits == 0:
            return 100.0
        return self.processed_commits / self.total_commits * 100


@dataclass(frozen=True)
class ExtractionProgress:
    """Reported by the extractor; the last report has ``is_complete`` set."""

    total_commits: int
    matching_commits: int
    processed_commits: int
    generated_files: int
    start_time: datetime
    current_time: datetime
    current_file_path: Optional[str] = None
    is_complete: bool = False

    @property
    def percent_complete(self) -> float:
        if self.matching_commits == 0:
            return 100.0
        return self.processed_commits / self.matching_commits * 100

    @property
    def elapsed(self) -> timedelta:
        return self.current_time - self.start_time


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of a full extraction run."""

    total_commits: int
    matching_commits: int
    generated_files: int
    generated_file_paths: tuple[str, ...]
    start_time: datetime
    end_time: datetime

    @property
    def elapsed(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def has_commits(self) -> bool:
        return self.matching_commits > 0

    def summary(self) -> str:
        """Return a short multi-line summary of the run."""
        return (
            f"Total commits: {self.total_commits}\n"
            f"Matching commits: {self.matching_commits}\n"
            f"Generated files: {self.generated_files}\n"
            f"Elapsed time: {self.elapsed.total_seconds():.2f} seconds\n"
        )
