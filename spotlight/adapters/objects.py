"""Live Python object adapter for Spotlight.

This adapter lets Spotlight crawl ordinary Python objects: modules, class
namespaces, instances (``__dict__`` and ``__slots__``), mappings, lists and
tuples. It is split into three pieces that mirror the capabilities the
traverser asks of a GraphAdapter:

- ObjectClassifier decides what kind a value is and whether to descend
- OwnPropertyIterator lists and reads own properties without raising
- suspended_iterator_hook neutralises a per-instance ``__iter__`` while
  the instance is being enumerated
"""

import types
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple

from ..core.adapter import GraphAdapter, STOP
from ..errors import EnumerationFailure, HookRestoreError, PropertyAccessError


class _Undefined:
    """Sentinel for a declared ``__slots__`` member that was never assigned."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNDEFINED'

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

# Values that never get a node of their own
PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes, bytearray, range, _Undefined)

# Class-level descriptors describing instance layout, not class data
LAYOUT_DESCRIPTORS = (types.MemberDescriptorType, types.GetSetDescriptorType)


def is_dunder(name: Any) -> bool:
    """Check for ``__special__`` style names."""
    return (isinstance(name, str) and len(name) > 4
            and name.startswith('__') and name.endswith('__'))


def slot_names(cls: type) -> List[str]:
    """Return every ``__slots__`` name declared along the MRO of ``cls``.

    Private names are mangled the way the interpreter stores them. The list
    may contain duplicates when a subclass redeclares a parent's slot.
    """
    names = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith('__') and not name.endswith('__'):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            names.append(name)
    return names


def inert_iterator(*args, **kwargs) -> Iterator[Any]:
    """Stand-in iterator hook that yields nothing."""
    return iter(())


@contextmanager
def suspended_iterator_hook(obj: Any,
                            name: Optional[str] = '__iter__',
                            on_restore_error: Optional[Callable[[Exception], None]] = None):
    """Temporarily replace an instance's own callable ``name`` attribute.

    Yields True when ``obj`` may be enumerated, False when the hook exists
    but could not be replaced (the caller should skip the object). The
    original hook is put back on every exit path.

    Classes are left alone: their ``__iter__`` belongs to every instance.

    Args:
        obj: Object about to be enumerated
        name: Attribute name of the hook (None disables the probe)
        on_restore_error: Called with the exception if restoring fails
    """
    hook = None
    if name is not None:
        try:
            if not isinstance(obj, type):
                hook = vars(obj).get(name)
            if hook is not None and not callable(hook):
                hook = None
        except Exception:
            hook = None

    if hook is None or hook is inert_iterator:
        yield True
        return

    try:
        setattr(obj, name, inert_iterator)
        swapped = True
    except Exception:
        swapped = False

    if not swapped:
        yield False
        return

    try:
        yield True
    finally:
        try:
            setattr(obj, name, hook)
        except Exception as exc:
            if on_restore_error is not None:
                on_restore_error(exc)


class ObjectClassifier:
    """Classifies Python values into kind labels.

    Kinds are "Null", "Undefined", "Global", "Constructor", or the value's
    type name with its first letter capitalised ("Int", "Dict", "Foo").
    """

    def __init__(self, global_object: Any = None, follow_modules: bool = False):
        """
        Args:
            global_object: Object reported as "Global" (identity match)
            follow_modules: Descend into modules reached through properties
        """
        self.global_object = global_object
        self.follow_modules = follow_modules

    def classify(self, value: Any) -> str:
        try:
            return self._classify(value)
        except Exception:
            return 'Object'

    def _classify(self, value: Any) -> str:
        if value is None:
            return 'Null'
        if value is UNDEFINED:
            return 'Undefined'
        if self.global_object is not None and value is self.global_object:
            return 'Global'
        if isinstance(value, type) and self.is_constructor(value):
            return 'Constructor'
        name = type(value).__name__
        return name[:1].upper() + name[1:]

    @staticmethod
    def is_constructor(cls: type) -> bool:
        """A class is a "Constructor" if it has own public members or a custom metaclass.

        Empty plain classes fall back to the intrinsic "Type" kind.
        """
        if type(cls) is not type:
            return True
        for key, value in vars(cls).items():
            if not is_dunder(key) and not isinstance(value, LAYOUT_DESCRIPTORS):
                return True
        return False

    def is_traversable(self, value: Any) -> bool:
        """Check if ``value`` has own properties worth a node of its own."""
        try:
            if isinstance(value, PRIMITIVE_TYPES):
                return False
            if isinstance(value, types.ModuleType):
                return self.follow_modules
            if isinstance(value, (Mapping, list, tuple)):
                return True
            if isinstance(getattr(value, '__dict__', None), Mapping):
                return True
            return bool(slot_names(type(value)))
        except Exception:
            return False


class OwnPropertyIterator:
    """Enumerates own properties of Python objects.

    - Mappings yield their items, lists and tuples their indices
    - Other objects yield their ``__dict__`` entries followed by any
      ``__slots__`` members (unset slots read as UNDEFINED)
    - Dunder attribute names are skipped unless ``include_dunder`` is set
    - A class never yields its slot/getset layout descriptors
    - Each key is yielded at most once per call
    """

    def __init__(self, include_dunder: bool = False):
        self.include_dunder = include_dunder

    def own_keys(self, obj: Any) -> List[Any]:
        """Return the de-duplicated own keys of ``obj``.

        Raises whatever the object raises while being listed; use
        ``for_each`` for contained enumeration.
        """
        keys, _ = self._collect(obj)
        return keys

    def _collect(self, obj: Any) -> Tuple[List[Any], Callable[[Any], Any]]:
        if isinstance(obj, Mapping):
            return list(dict.fromkeys(obj.keys())), obj.__getitem__
        if isinstance(obj, (list, tuple)):
            return list(range(len(obj))), obj.__getitem__

        namespace = getattr(obj, '__dict__', None)
        if not isinstance(namespace, Mapping):
            namespace = None

        keys = list(namespace.keys()) if namespace is not None else []
        if not isinstance(obj, type):
            keys.extend(slot_names(type(obj)))

        keys = [key for key in dict.fromkeys(keys)
                if self.include_dunder or not is_dunder(key)]

        def read(key):
            if namespace is not None and key in namespace:
                return namespace[key]
            try:
                return getattr(obj, key)
            except AttributeError:
                return UNDEFINED

        return keys, read

    def for_each(self,
                 obj: Any,
                 visit: Callable[[Any, Any, Any], Any],
                 node: Any = None,
                 error_policy: Any = None) -> None:
        """Call ``visit(value, key, obj)`` for each own property.

        Errors listing the object or reading a key are wrapped and passed
        to ``error_policy`` (if any) and never propagate. Errors raised by
        ``visit`` itself do propagate.
        """
        path = getattr(node, 'path', None)
        try:
            keys, read = self._collect(obj)
            skip_layout = isinstance(obj, type)
        except Exception as exc:
            if error_policy is not None:
                failure = EnumerationFailure(f"cannot enumerate {type(obj).__name__}", path=path)
                failure.__cause__ = exc
                error_policy.handle(failure, node)
            return

        for key in keys:
            try:
                value = read(key)
                # isinstance() consults __class__, which proxies may refuse
                if skip_layout and isinstance(value, LAYOUT_DESCRIPTORS):
                    continue
            except Exception as exc:
                if error_policy is not None:
                    failure = PropertyAccessError(f"cannot read key of type {type(key).__name__}",
                                                  path=path, key=key)
                    failure.__cause__ = exc
                    error_policy.handle(failure, node)
                continue

            if visit(value, key, obj) is STOP:
                break


class ObjectGraphAdapter(GraphAdapter):
    """Adapter for crawling live Python objects."""

    def __init__(self,
                 global_object: Any = None,
                 follow_modules: bool = False,
                 include_dunder: bool = False,
                 iterator_hook: Optional[str] = '__iter__'):
        """Initialize the adapter.

        Args:
            global_object: Object reported as "Global"
            follow_modules: Descend into modules reached through properties
            include_dunder: Also enumerate ``__special__`` attribute names
            iterator_hook: Per-instance hook neutralised during enumeration
        """
        super().__init__(global_object)
        self.classifier = ObjectClassifier(global_object, follow_modules)
        self.properties = OwnPropertyIterator(include_dunder)
        self.iterator_hook = iterator_hook

    @classmethod
    def from_config(cls, config) -> 'ObjectGraphAdapter':
        """Build an adapter from a SpotlightConfig."""
        return cls(
            global_object=config.global_object,
            follow_modules=config.follow_modules,
            include_dunder=config.include_dunder,
            iterator_hook=config.iterator_hook,
        )

    def for_each_own_property(self, obj, visit, node=None) -> None:
        self.properties.for_each(obj, visit, node, self.error_policy)

    def own_keys(self, obj: Any) -> List[Any]:
        try:
            return self.properties.own_keys(obj)
        except Exception:
            return []

    def classify(self, value: Any) -> str:
        return self.classifier.classify(value)

    def is_traversable(self, value: Any) -> bool:
        return self.classifier.is_traversable(value)

    def prepared(self, obj: Any, node: Any = None):
        return suspended_iterator_hook(obj, self.iterator_hook,
                                       lambda exc: self._restore_failed(exc, node))

    def _restore_failed(self, exc: Exception, node: Any) -> None:
        if self.error_policy is None:
            return
        failure = HookRestoreError(f"cannot restore {self.iterator_hook}",
                                   path=getattr(node, 'path', None),
                                   key=self.iterator_hook)
        failure.__cause__ = exc
        self.error_policy.handle(failure, node)

    def supports_mutation_probe(self) -> bool:
        return self.iterator_hook is not None
