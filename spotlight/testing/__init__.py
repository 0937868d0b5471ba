"""Testing utilities for Spotlight."""

from .fixtures import (
    make_self_cycle,
    make_shared_graph,
    make_deep_chain,
    ExplodingNamespace,
    ExplodingMapping,
    ExplodingSlot,
    Slotted,
    RedeclaredSlots,
    HookedBag,
    LockedHookedBag,
    HostileProxy,
)

__all__ = [
    "make_self_cycle",
    "make_shared_graph",
    "make_deep_chain",
    "ExplodingNamespace",
    "ExplodingMapping",
    "ExplodingSlot",
    "Slotted",
    "RedeclaredSlots",
    "HookedBag",
    "LockedHookedBag",
    "HostileProxy",
]
