"""Test fixtures for Spotlight consumers.

Small object graphs with the shapes that break naive crawlers: cycles,
shared objects, objects that refuse to be listed or read, and instances
carrying their own iterator hook. They are public so that projects using
Spotlight can reuse them in their own test suites.
"""

from types import SimpleNamespace
from typing import Any, Dict


def make_self_cycle() -> Dict[str, Any]:
    """Return ``a`` with ``a['b'] is a``."""
    a: Dict[str, Any] = {}
    a['b'] = a
    return a


def make_shared_graph() -> SimpleNamespace:
    """Return ``root`` where ``root.x`` and ``root.y`` are the same object.

    The shared object is reachable through two sibling branches and must
    be reported under both.
    """
    shared = SimpleNamespace(shared=True)
    return SimpleNamespace(x=shared, y=shared)


def make_deep_chain(depth: int) -> Dict[str, Any]:
    """Return a chain of ``depth`` nested dicts linked through ``'next'``.

    The innermost dict holds ``'end': True``.
    """
    head: Dict[str, Any] = {'end': True}
    for _ in range(depth):
        head = {'next': head}
    return head


class ExplodingNamespace:
    """Instance whose ``__dict__`` cannot be read at all."""

    def __getattribute__(self, name):
        if name == '__dict__':
            raise RuntimeError("namespace is off limits")
        return super().__getattribute__(name)


class ExplodingMapping(dict):
    """Mapping whose item access fails for selected keys."""

    def __init__(self, *args, poisoned=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.poisoned = set(poisoned)

    def __getitem__(self, key):
        if key in self.poisoned:
            raise LookupError(f"{key!r} is poisoned")
        return super().__getitem__(key)


class ExplodingSlot:
    """Slot whose descriptor raises something other than AttributeError."""

    __slots__ = ('fine', 'broken')

    def __init__(self):
        self.fine = 1

    def __getattribute__(self, name):
        if name == 'broken':
            raise RuntimeError("broken slot")
        return super().__getattribute__(name)


class Slotted:
    """Slotted instance with one assigned and one unassigned slot."""

    __slots__ = ('assigned', 'unassigned')

    def __init__(self, value):
        self.assigned = value


class RedeclaredSlots(Slotted):
    """Subclass redeclaring a parent slot; its name must be listed once."""

    __slots__ = ('assigned', 'extra')


class HookedBag:
    """Instance carrying its own ``__iter__`` hook.

    ``calls`` counts how often the hook ran, so tests can check that
    enumeration never invoked it.
    """

    def __init__(self, **values):
        self.calls = 0
        self.__dict__.update(values)

        def hook():
            self.calls += 1
            return iter(values)

        self.__dict__['__iter__'] = hook


class LockedHookedBag(HookedBag):
    """HookedBag whose hook cannot be replaced."""

    def __setattr__(self, name, value):
        if name == '__iter__':
            raise AttributeError("hook is locked")
        super().__setattr__(name, value)


class HostileProxy:
    """Object that refuses to report its ``__class__``.

    Context-bound proxies (a request-local object used outside its request)
    behave like this, and ``isinstance`` consults ``__class__`` when the
    plain type check fails.
    """

    @property
    def __class__(self):
        raise RuntimeError("working outside of context")

