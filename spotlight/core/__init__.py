"""Core abstractions for Spotlight.

This package contains the traversal engine and the interfaces it is built
on: the GraphAdapter boundary, the filter protocol and the reporters.
"""

from .node import Node, PoolEntry, MatchResult, join_path
from .adapter import GraphAdapter, STOP
from .filters import (
    FilterKind,
    PropertyFilter,
    KindFilter,
    NameFilter,
    ValueFilter,
    CustomFilter,
    create_filter,
    strictly_equal,
)
from .reporter import Reporter, ConsoleReporter, CollectingReporter, NullReporter
from .traverser import GraphTraverser

__all__ = [
    "Node",
    "PoolEntry",
    "MatchResult",
    "join_path",
    "GraphAdapter",
    "STOP",
    "FilterKind",
    "PropertyFilter",
    "KindFilter",
    "NameFilter",
    "ValueFilter",
    "CustomFilter",
    "create_filter",
    "strictly_equal",
    "Reporter",
    "ConsoleReporter",
    "CollectingReporter",
    "NullReporter",
    "GraphTraverser",
]
