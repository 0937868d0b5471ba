"""Property filters for Spotlight.

Every filter has the same shape: it is built around one argument (a kind,
a name, a value, or a predicate) and answers ``matches(value, key, owner,
node)`` for each own property the traverser visits. Arguments are checked
once, before any traversal, through ``validate()``.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

from .adapter import GraphAdapter
from .node import Node


# Immutable values compared by value instead of identity
_VALUE_TYPES = (int, float, complex, str, bytes, bool, type(None))


def strictly_equal(left: Any, right: Any) -> bool:
    """Strict equality: identity, or same-type equality for immutable scalars.

    ``0`` matches ``0`` but not ``False``, ``0.0`` or ``"0"``.
    """
    if left is right:
        return True
    return (type(left) is type(right)
            and isinstance(left, _VALUE_TYPES)
            and left == right)


class FilterKind(Enum):
    """The closed set of built-in filters."""
    KIND = "kind"       # Instance of a class, or type name / kind label
    NAME = "name"       # Property key equals a name
    VALUE = "value"     # Property value strictly equals a value
    CUSTOM = "custom"   # User predicate


class PropertyFilter(ABC):
    """Abstract base class for property filters.

    Filters are bound to an adapter so they can classify values the same
    way the traverser does.
    """

    # Human readable labels of the accepted argument kinds, for error messages
    expected: Tuple[str, ...] = ()

    def __init__(self, argument: Any, adapter: Optional[GraphAdapter] = None):
        """Initialize filter.

        Args:
            argument: The value searched for (kind, name, value or predicate)
            adapter: GraphAdapter used for classification
        """
        self.argument = argument
        self.adapter = adapter

    @abstractmethod
    def matches(self, value: Any, key: Any, owner: Any, node: Optional[Node] = None) -> bool:
        """Check one property.

        Args:
            value: The property value
            key: The property key
            owner: The object owning the property
            node: The traversal Node being enumerated (path and pool context)

        Returns:
            True if the property should be reported
        """
        pass

    def accepts(self, argument: Any) -> bool:
        """Check if ``argument`` is of a kind this filter can use."""
        return True

    def validate(self) -> Optional[str]:
        """Return an error message if the argument is unusable, else None."""
        if self.accepts(self.argument):
            return None
        return f"`{self.argument!r}` must be a {' or '.join(self.expected)}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.argument!r})"


class KindFilter(PropertyFilter):
    """Matches values by class, type name or kind label.

    - A class argument matches instances of it (``isinstance``)
    - A string matches the value's type name or qualified type name exactly,
      or its kind label case-insensitively (so ``'constructor'`` and
      ``'null'`` work too)
    """

    expected = ('class', 'str')

    def accepts(self, argument: Any) -> bool:
        return isinstance(argument, (type, str))

    def matches(self, value, key, owner, node=None) -> bool:
        kind = self.argument
        if isinstance(kind, type):
            return isinstance(value, kind)

        value_type = type(value)
        if value_type.__name__ == kind:
            return True
        if f"{value_type.__module__}.{value_type.__qualname__}" == kind:
            return True
        return self.adapter.classify(value).lower() == kind.lower()


class NameFilter(PropertyFilter):
    """Matches properties whose key equals the name."""

    expected = ('str',)

    def accepts(self, argument: Any) -> bool:
        return isinstance(argument, str)

    def matches(self, value, key, owner, node=None) -> bool:
        return key == self.argument


class ValueFilter(PropertyFilter):
    """Matches properties whose value strictly equals the argument."""

    def matches(self, value, key, owner, node=None) -> bool:
        return strictly_equal(value, self.argument)


class CustomFilter(PropertyFilter):
    """Delegates to a user predicate ``predicate(value, key, owner)``.

    With ``pass_node=True`` the predicate is called as
    ``predicate(value, key, owner, node)`` and can inspect the current
    path and pool.
    """

    expected = ('function',)

    def __init__(self, argument: Callable[..., Any], adapter: Optional[GraphAdapter] = None,
                 pass_node: bool = False):
        super().__init__(argument, adapter)
        self.pass_node = pass_node

    def accepts(self, argument: Any) -> bool:
        return callable(argument)

    def matches(self, value, key, owner, node=None) -> bool:
        if self.pass_node:
            return bool(self.argument(value, key, owner, node))
        return bool(self.argument(value, key, owner))


# Factory function for creating filters by kind
def create_filter(kind: Union[FilterKind, str],
                  argument: Any,
                  adapter: Optional[GraphAdapter] = None,
                  **options) -> PropertyFilter:
    """Create a filter instance by kind.

    Args:
        kind: FilterKind or its name (kind, name, value, custom)
        argument: The filter argument
        adapter: GraphAdapter used for classification
        **options: Extra filter options (``pass_node`` for custom filters)

    Returns:
        PropertyFilter instance

    Raises:
        ValueError: If kind is not recognized
    """
    filters = {
        FilterKind.KIND: KindFilter,
        FilterKind.NAME: NameFilter,
        FilterKind.VALUE: ValueFilter,
        FilterKind.CUSTOM: CustomFilter,
    }

    if not isinstance(kind, FilterKind):
        try:
            kind = FilterKind(str(kind).lower())
        except ValueError:
            raise ValueError(
                f"Unknown filter kind: {kind}. "
                f"Choose from: {', '.join(k.value for k in FilterKind)}"
            ) from None

    return filters[kind](argument, adapter, **options)
