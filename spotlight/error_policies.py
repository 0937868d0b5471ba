"""
Error handling policies for Spotlight.

This module provides a flexible error handling system through the Policy pattern,
allowing users to decide what happens to the errors that are contained during
a crawl (unreadable properties, objects that refuse enumeration, filters that
raise). No policy lets an error escape the public search functions.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import sys

from .errors import (
    SpotlightError,
    PropertyAccessError,
    EnumerationFailure,
    FilterEvaluationError,
    ErrorThresholdExceeded,
)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors
    that occur while walking an object graph.
    """

    @abstractmethod
    def handle(self, error: SpotlightError, node: Any = None) -> None:
        """
        Handle an error that was contained during traversal.

        Args:
            error: The wrapped error; the original exception is its __cause__
            node: The Node being processed when the error occurred, if any
        """
        pass

    @staticmethod
    def _make_record(error: SpotlightError, node: Any) -> Dict[str, Any]:
        """Build the dictionary stored for each recorded error."""
        cause = error.__cause__
        return {
            'path': error.path if error.path is not None else getattr(node, 'path', None),
            'key': error.key,
            'error': error,
            'error_type': type(error).__name__,
            'cause_type': type(cause).__name__ if cause is not None else None,
            'error_message': str(error),
        }


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors without printing anything.

    This is the default: crawls over live environments hit unreadable
    properties constantly and printing each one would drown the matches.
    """

    def __init__(self):
        """Initialize the policy."""
        self.errors: List[Dict[str, Any]] = []

    def handle(self, error: SpotlightError, node: Any = None) -> None:
        """Silently record the error."""
        self.errors.append(self._make_record(error, node))

    def clear(self) -> None:
        """Forget previously recorded errors."""
        self.errors = []

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'property_errors': sum(1 for e in self.errors if e['error_type'] == PropertyAccessError.__name__),
            'enumeration_errors': sum(1 for e in self.errors if e['error_type'] == EnumerationFailure.__name__),
            'filter_errors': sum(1 for e in self.errors if e['error_type'] == FilterEvaluationError.__name__),
            'errors': self.errors
        }


class ContinueOnErrorsPolicy(CollectErrorsPolicy):
    """
    Policy that records errors and prints a warning for each one.

    Useful when debugging why a property you expected never showed up.
    """

    def __init__(self, verbose: bool = True, stream=None):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings when errors occur
            stream: Where warnings go (defaults to sys.stderr at print time)
        """
        super().__init__()
        self.verbose = verbose
        self.stream = stream

    def handle(self, error: SpotlightError, node: Any = None) -> None:
        """Record the error and optionally print it."""
        record = self._make_record(error, node)
        self.errors.append(record)

        if self.verbose:
            cause = error.__cause__
            detail = f"{type(cause).__name__}: {cause}" if cause is not None else str(error)
            print(f"WARNING: {record['error_type']} at '{record['path']}': {detail}",
                  file=self.stream or sys.stderr)


class ThresholdPolicy(CollectErrorsPolicy):
    """
    Policy that tolerates errors up to a threshold, then ends the crawl.

    Useful when some errors are expected but too many indicate that the
    graph is hostile and the crawl is wasting time. Ending the crawl does
    not raise through the public API: the matches found so far are kept.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = False, stream=None):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before stopping
            verbose: If True, print warnings for errors
            stream: Where warnings go (defaults to sys.stderr at print time)
        """
        super().__init__()
        self.max_errors = max_errors
        self.verbose = verbose
        self.stream = stream

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def handle(self, error: SpotlightError, node: Any = None) -> None:
        """Record the error and stop the crawl once over the threshold."""
        record = self._make_record(error, node)
        self.errors.append(record)

        if self.verbose:
            print(f"WARNING [{self.error_count}/{self.max_errors}]: "
                  f"{record['error_type']} at '{record['path']}': {error}",
                  file=self.stream or sys.stderr)

        if self.error_count > self.max_errors:
            raise ErrorThresholdExceeded(
                f"Error threshold exceeded ({self.max_errors} errors)",
                path=record['path']
            ) from error


def resolve_policy(policy: Optional[ErrorPolicy]) -> ErrorPolicy:
    """Return the given policy, or a fresh CollectErrorsPolicy."""
    return policy if policy is not None else CollectErrorsPolicy()
