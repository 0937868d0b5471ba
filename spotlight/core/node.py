"""Traversal data structures for Spotlight.

Nodes, pool entries and match results are plain data containers. They are
created and discarded within a single crawl; the object graph they point
into is owned by the caller and never modified structurally.
"""

import keyword
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class PoolEntry:
    """An object already scheduled on the current branch, and how it was reached."""

    object: Any
    path: str


@dataclass
class Node:
    """One point in the traversal frontier.

    The pool holds every object scheduled along the branch leading here,
    starting with the root. It is copied whenever the branch forks so that
    siblings never see each other's entries.
    """

    object: Any
    path: str
    pool: List[PoolEntry] = field(default_factory=list)

    @property
    def depth(self) -> int:
        """Depth below the root (root = 0)."""
        return max(len(self.pool) - 1, 0)

    def find_pooled(self, value: Any) -> Optional[PoolEntry]:
        """Return the pool entry holding exactly ``value``, if any.

        Membership is by identity, never by equality.
        """
        for entry in self.pool:
            if entry.object is value:
                return entry
        return None

    def __repr__(self) -> str:
        return f"Node(path={self.path!r}, depth={self.depth})"


@dataclass
class MatchResult:
    """One reported property.

    ``kind_label`` is the classified kind of the value as the adapter
    returned it (``"Int"``, ``"Constructor"``). When the value is an alias
    of an object already on the branch it is instead the path of that
    object wrapped in angle brackets, and ``alias_of`` holds that path.
    Lowercasing happens only when the report line is rendered.
    """

    path: str
    kind_label: str
    value: Any = field(repr=False)
    alias_of: Optional[str] = None

    @property
    def is_alias(self) -> bool:
        return self.alias_of is not None

    @property
    def message(self) -> str:
        """The report line, e.g. ``"__main__.config -> (dict)"``."""
        label = self.kind_label if self.is_alias else self.kind_label.lower()
        return f"{self.path} -> ({label})"

    def as_pair(self):
        """Return ``(message, value)`` as handed to a reporter sink."""
        return (self.message, self.value)


def join_path(parent: str, key: Any) -> str:
    """Build the symbolic path for ``key`` below ``parent``.

    Identifier-shaped string keys use attribute syntax (``parent.key``, or
    just ``key`` under an empty parent). Any other key is subscripted with
    its repr and needs no separator.

    Paths are for reading, not for ``eval``: a dict entry ``'a'`` renders
    as ``parent.a`` even though Python would spell it ``parent['a']``, and
    keys whose repr fails render as ``[<TypeName>]``.

    Examples:
        >>> join_path('', 'foo')
        'foo'
        >>> join_path('window', 'foo')
        'window.foo'
        >>> join_path('data', 0)
        'data[0]'
        >>> join_path('data', 'not valid')
        "data['not valid']"
    """
    if isinstance(key, str) and key.isidentifier() and not keyword.iskeyword(key):
        separator = '.' if parent else ''
        return f"{parent}{separator}{key}"
    try:
        text = repr(key)
    except Exception:
        text = f"<{type(key).__name__}>"
    return f"{parent}[{text}]"
