"""GraphAdapter abstraction for Spotlight.

The GraphAdapter is what lets the traverser stay ignorant of the object
model it walks. It supplies exactly the capabilities the core needs:
enumerating an object's own properties, classifying a value into a kind
label, and deciding whether a value is worth descending into.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List


# A visitor returning this exact value stops enumeration of the current object.
STOP = False


class GraphAdapter(ABC):
    """Abstract adapter for reflecting over a specific kind of object graph.

    This separation allows:
    - The same traverser to walk live Python objects or parsed JSON data
    - Object-model quirks to stay out of the traversal algorithm
    - Tests to substitute small, predictable adapters
    """

    def __init__(self, global_object: Any = None):
        """Initialize the adapter.

        Args:
            global_object: Object that classifies as "Global" (identity match)
        """
        self.global_object = global_object
        self.error_policy = None

    @abstractmethod
    def for_each_own_property(self,
                              obj: Any,
                              visit: Callable[[Any, Any, Any], Any],
                              node: Any = None) -> None:
        """Call ``visit(value, key, obj)`` once per own property of ``obj``.

        Implementations must never raise: failures to enumerate the object,
        or to read one key, are reported to ``self.error_policy`` and
        contained. A visitor returning ``STOP`` ends enumeration early.

        Args:
            obj: The object to enumerate
            visit: Callback per property
            node: The traversal Node being processed, for error context
        """
        pass

    @abstractmethod
    def classify(self, value: Any) -> str:
        """Return the kind label of ``value``. Must never raise."""
        pass

    @abstractmethod
    def is_traversable(self, value: Any) -> bool:
        """Return True if ``value`` should become a node of its own.

        Must never raise; probing errors mean "not traversable".
        """
        pass

    def own_keys(self, obj: Any) -> List[Any]:
        """Return the own keys of ``obj`` in enumeration order.

        Default implementation collects keys through for_each_own_property.
        """
        keys: List[Any] = []
        self.for_each_own_property(obj, lambda value, key, owner: keys.append(key))
        return keys

    @contextmanager
    def prepared(self, obj: Any, node: Any = None) -> Iterator[bool]:
        """Prepare ``obj`` for enumeration.

        Yields True if the object may be enumerated now, False if it must
        be skipped for this step. Whatever is changed here is undone when
        the block exits. The default does nothing.
        """
        yield True

    # Capability flags - adapters declare what they support

    def supports_mutation_probe(self) -> bool:
        """Check if ``prepared`` may temporarily touch the object.

        Returns:
            True if the adapter swaps attributes during enumeration
        """
        return False

    def describe(self) -> str:
        """Short human readable name used in plan summaries."""
        return self.__class__.__name__
