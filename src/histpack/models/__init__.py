"""Data models for histpack."""

from histpack.models.commit import Change, ChangeKind, Commit
from histpack.models.options import FormattingOptions
from histpack.models.progress import (
    ExtractionProgress,
    ExtractionResult,
    GenerationProgress,
)

__all__ = [
    "Change",
    "ChangeKind",
    "Commit",
    "FormattingOptions",
    "GenerationProgress",
    "ExtractionProgress",
    "ExtractionResult",
]
