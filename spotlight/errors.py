"""Exception taxonomy for Spotlight.

Only ``configure()`` raises to a caller (ConfigurationError). A search
reports a bad argument or configuration through the Reporter instead.
The rest are contained at the node, key or property level and handed to
the active ErrorPolicy for bookkeeping.
"""

from typing import Any, Optional


class SpotlightError(Exception):
    """Base class for all Spotlight errors."""

    def __init__(self, message: str, path: Optional[str] = None, key: Any = None):
        super().__init__(message)
        self.path = path
        self.key = key


class ArgumentTypeError(SpotlightError, TypeError):
    """A search was started with an argument of the wrong kind."""
    pass


class ConfigurationError(SpotlightError, ValueError):
    """A SpotlightConfig failed validation."""
    pass


class PropertyAccessError(SpotlightError):
    """Reading one own property of a visited object raised."""
    pass


class EnumerationFailure(SpotlightError):
    """Listing the own properties of a visited object raised."""
    pass


class FilterEvaluationError(SpotlightError):
    """The active filter raised while evaluating one property."""
    pass


class HookRestoreError(SpotlightError):
    """An iterator hook could not be put back after enumeration."""
    pass


class ReportError(SpotlightError):
    """The reporter raised while emitting a match."""
    pass


class ErrorThresholdExceeded(SpotlightError):
    """Raised by ThresholdPolicy to end a crawl early.

    The traverser catches this and returns the matches found so far.
    """
    pass
