"""Exception hierarchy for histpack."""


class HistpackError(Exception):
    """Base class for all histpack errors."""


class ConfigurationError(HistpackError):
    """Invalid formatting or extraction options."""


class SourceError(HistpackError):
    """A commit source could not be opened or read."""
