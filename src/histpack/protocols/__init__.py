"""Protocol definitions for extensible components."""

from histpack.protocols.path_filter import PathFilter
from histpack.protocols.renderer import Renderer
from histpack.protocols.source import CommitSource

__all__ = ["CommitSource", "PathFilter", "Renderer"]
