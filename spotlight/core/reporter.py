"""Reporters for Spotlight.

A Reporter is the sink every match and every argument error is sent to.
Crawls are meant to be watched as they run, so the default reporter prints
one line per match immediately instead of waiting for the crawl to end.
"""

import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from .node import MatchResult


class Reporter(ABC):
    """Abstract sink for crawl output."""

    @abstractmethod
    def match(self, result: MatchResult) -> None:
        """Emit one match."""
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        """Emit one error message (e.g. a rejected search argument)."""
        pass


class ConsoleReporter(Reporter):
    """Prints matches and errors to text streams.

    Matches are written as ``<path> -> (<kind>) <repr(value)>``; errors as
    ``error: <message>``. Streams default to stdout/stderr looked up at
    print time so that redirection and capture work.
    """

    def __init__(self,
                 stream: Optional[TextIO] = None,
                 error_stream: Optional[TextIO] = None,
                 max_repr: Optional[int] = 120):
        """
        Args:
            stream: Destination for matches (default sys.stdout)
            error_stream: Destination for errors (default sys.stderr)
            max_repr: Truncate value reprs longer than this (None = never)
        """
        self.stream = stream
        self.error_stream = error_stream
        self.max_repr = max_repr

    def _format_value(self, value) -> str:
        try:
            text = repr(value)
        except Exception as exc:
            text = f"<unrepresentable {type(value).__name__}: {exc!r}>"
        if self.max_repr is not None and len(text) > self.max_repr:
            text = text[:self.max_repr - 3] + '...'
        return text

    def match(self, result: MatchResult) -> None:
        print(result.message, self._format_value(result.value),
              file=self.stream or sys.stdout)

    def error(self, message: str) -> None:
        print(f"error: {message}", file=self.error_stream or sys.stderr)


class CollectingReporter(Reporter):
    """Keeps everything in memory. Handy in tests and notebooks."""

    def __init__(self):
        self.matches: List[MatchResult] = []
        self.errors: List[str] = []

    def match(self, result: MatchResult) -> None:
        self.matches.append(result)

    def error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def lines(self) -> List[str]:
        return [result.message for result in self.matches]


class NullReporter(Reporter):
    """Drops everything."""

    def match(self, result: MatchResult) -> None:
        pass

    def error(self, message: str) -> None:
        pass
