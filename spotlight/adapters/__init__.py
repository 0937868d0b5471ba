"""Graph adapters for specific object models.

Adapters implement the GraphAdapter interface for different object graphs,
enabling Spotlight to crawl live Python objects or plain JSON data.
"""

from .objects import (
    ObjectGraphAdapter,
    ObjectClassifier,
    OwnPropertyIterator,
    UNDEFINED,
    suspended_iterator_hook,
)
from .plain import PlainDataAdapter

__all__ = [
    "ObjectGraphAdapter",
    "ObjectClassifier",
    "OwnPropertyIterator",
    "UNDEFINED",
    "suspended_iterator_hook",
    "PlainDataAdapter",
]
