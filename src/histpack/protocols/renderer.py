"""Protocol for commit renderers."""

from typing import Protocol, runtime_checkable

from histpack.models import Commit, FormattingOptions


@runtime_checkable
class Renderer(Protocol):
    """Protocol for turning a commit into a text fragment.

    The paginator only depends on this protocol, so alternate output
    formats can be plugged in without touching pagination.
    """

    def render(self, commit: Commit, options: FormattingOptions) -> str:
        """Render a whole commit (header, message and changes)."""
        ...

    def render_changes(self, commit: Commit, options: FormattingOptions) -> str:
        """Render only the changes section of a commit."""
        ...
