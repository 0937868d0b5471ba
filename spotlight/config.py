"""Configuration system for Spotlight.

This module defines how users specify where a crawl starts and how it
behaves: the default roots, debug mode, depth limits and which parts of
the Python object model are considered enumerable.
"""

import sys
import types
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class Root:
    """A named starting point for a crawl."""

    object: Any
    path: str


# Path used when an explicit root object matches no default root
ANONYMOUS_PATH = '<object>'


def main_module() -> Optional[types.ModuleType]:
    """Return the ``__main__`` module, the closest thing Python has to a global object."""
    return sys.modules.get('__main__')


def default_roots() -> List[Root]:
    """Detect the roots to crawl when a search gives none.

    Returns:
        ``[Root(__main__, '__main__')]`` when running as a script,
        interactively or under a test runner; empty if ``__main__`` is gone
    """
    module = main_module()
    if module is None:
        return []
    return [Root(module, '__main__')]


@dataclass
class SpotlightConfig:
    """Complete configuration for Spotlight searches.

    A Spotlight instance copies its config when constructed or reconfigured,
    so changes never reach a crawl that is already running.
    """

    # Where crawls start when no object is given
    roots: List[Root] = field(default_factory=default_roots)

    # Return matches from searches (False = report only, return None)
    debug: bool = False

    # Depth control
    max_depth: Optional[int] = None

    # Object model
    global_object: Any = field(default_factory=main_module)
    follow_modules: bool = False      # Descend into modules found as properties
    include_dunder: bool = False      # Enumerate __special__ attribute names
    iterator_hook: Optional[str] = '__iter__'  # Per-instance hook neutralised while enumerating

    # Convenience constructors for common configurations

    @classmethod
    def for_object(cls, obj: Any, path: str = ANONYMOUS_PATH, **kwargs) -> 'SpotlightConfig':
        """Create config crawling a single object by default.

        Args:
            obj: The root object
            path: Label used as the root of every reported path

        Returns:
            SpotlightConfig rooted at ``obj``
        """
        return cls(roots=[Root(obj, path)], **kwargs)

    @classmethod
    def for_module(cls, module: types.ModuleType, **kwargs) -> 'SpotlightConfig':
        """Create config treating ``module`` as the environment.

        The module becomes the only default root, labelled with its name,
        and classifies as "Global".
        """
        kwargs.setdefault('global_object', module)
        return cls(roots=[Root(module, module.__name__)], **kwargs)

    def resolve_roots(self, obj: Any = None, path: Optional[str] = None) -> List[Root]:
        """Work out the roots of one search.

        Args:
            obj: Explicit root object (None = use the default roots)
            path: Label for ``obj``; if omitted, the path of an identical
                default root is reused, else ``'<object>'``. Ignored
                without ``obj``.

        Returns:
            List of roots, processed last-first by the traverser
        """
        if obj is None:
            return list(self.roots)

        if path is None:
            path = next((root.path for root in self.roots if root.object is obj), ANONYMOUS_PATH)
        return [Root(obj, path)]

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_depth is not None and self.max_depth < 0:
            errors.append("max_depth cannot be negative")

        for index, root in enumerate(self.roots):
            if not isinstance(root, Root):
                errors.append(f"roots[{index}] must be a Root, got {type(root).__name__}")
            elif not isinstance(root.path, str):
                errors.append(f"roots[{index}].path must be a str")

        if self.iterator_hook is not None and not isinstance(self.iterator_hook, str):
            errors.append("iterator_hook must be a str or None")

        return errors
