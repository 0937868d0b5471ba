"""Plain data adapter for Spotlight.

Crawls JSON-shaped data (the output of ``json.load``): dicts, lists and
scalars. Kinds use JSON vocabulary so searches read naturally, e.g.
``by_kind('array')`` finds every list in a document.
"""

from typing import Any

from ..core.adapter import GraphAdapter, STOP
from ..errors import EnumerationFailure, PropertyAccessError


class PlainDataAdapter(GraphAdapter):
    """Adapter for JSON-like documents.

    Only dicts and lists are traversable. Anything else is a leaf.
    """

    KINDS = (
        (bool, 'Boolean'),
        (str, 'String'),
        ((int, float), 'Number'),
        (dict, 'Object'),
        ((list, tuple), 'Array'),
    )

    @classmethod
    def from_config(cls, config) -> 'PlainDataAdapter':
        """Build an adapter from a SpotlightConfig.

        Only ``global_object`` applies; the object model options do not.
        """
        return cls(global_object=config.global_object)

    def classify(self, value: Any) -> str:
        if value is None:
            return 'Null'
        if self.global_object is not None and value is self.global_object:
            return 'Global'
        # bool is checked before int on purpose
        for types_, kind in self.KINDS:
            if issubclass(type(value), types_):
                return kind
        name = type(value).__name__
        return name[:1].upper() + name[1:]

    def is_traversable(self, value: Any) -> bool:
        return issubclass(type(value), (dict, list, tuple))

    def for_each_own_property(self, obj, visit, node=None) -> None:
        path = getattr(node, 'path', None)
        try:
            if isinstance(obj, dict):
                keys = list(obj.keys())
            elif isinstance(obj, (list, tuple)):
                keys = list(range(len(obj)))
            else:
                return
        except Exception as exc:
            self._contain(EnumerationFailure(f"cannot enumerate {type(obj).__name__}", path=path), exc, node)
            return

        for key in keys:
            try:
                value = obj[key]
            except Exception as exc:
                # the document changed underneath us
                self._contain(PropertyAccessError(f"cannot read {key!r}", path=path, key=key), exc, node)
                continue
            if visit(value, key, obj) is STOP:
                break

    def _contain(self, failure, exc, node) -> None:
        if self.error_policy is None:
            return
        failure.__cause__ = exc
        self.error_policy.handle(failure, node)
