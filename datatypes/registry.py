"""
datatypes/registry.py
---------------------
Priority-ordered registry of competing type implementations.

Design Decisions:
    * Keys are always lower-case; a descriptor is filed under its canonical
      name and under every alias.
    * Each bucket is an immutable tuple ordered by descending priority, then
      by registration sequence. Equal priorities therefore keep both
      implementations (earliest registration first) instead of one silently
      replacing the other.
    * Mutations build a new tuple and swap it in under one registry-wide
      lock (copy-on-write); readers never lock and always see a complete
      bucket.
"""
from __future__ import annotations

import itertools
import threading
from typing import NamedTuple

from datatypes.descriptor import TypeDescriptor
from logger import get_logger

log = get_logger(__name__)


class _Entry(NamedTuple):
    descriptor: TypeDescriptor
    sequence: int


def _sort_key(entry: _Entry) -> tuple[int, int]:
    return (-entry.descriptor.priority, entry.sequence)


def _normalise(name: str) -> str:
    return name.strip().lower()


class TypeRegistry:
    """
    Mapping of lower-case type name → ordered tuple of descriptors.

    Example::

        registry = TypeRegistry()
        registry.register(TypeDescriptor.of(VarcharType))
        registry.first("VARCHAR")   # → the VarcharType descriptor
    """

    def __init__(self) -> None:
        self._buckets: dict[str, tuple[_Entry, ...]] = {}
        self._lock = threading.Lock()
        self._sequence = itertools.count()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def register(self, descriptor: TypeDescriptor) -> None:
        """
        File *descriptor* under its name and each alias.

        Registering a descriptor already present in a bucket is a no-op for
        that bucket.
        """
        with self._lock:
            sequence = next(self._sequence)
            for raw_name in descriptor.names:
                key = _normalise(raw_name)
                bucket = self._buckets.get(key, ())
                if any(entry.descriptor == descriptor for entry in bucket):
                    log.debug("'%s' already registered under '%s'.", descriptor, key)
                    continue
                entries = sorted((*bucket, _Entry(descriptor, sequence)), key=_sort_key)
                self._buckets[key] = tuple(entries)
        log.debug("Registered %s as %s.", descriptor, ", ".join(descriptor.names))

    def unregister(self, name: str) -> bool:
        """
        Remove every implementation registered under *name*.

        Returns True if a bucket was removed.
        """
        key = _normalise(name)
        with self._lock:
            removed = self._buckets.pop(key, None)
        if removed is None:
            return False
        log.debug("Unregistered '%s' (%d implementation(s)).", key, len(removed))
        return True

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def get(self, name: str) -> tuple[TypeDescriptor, ...]:
        """Return the descriptors for *name*, best first; empty if unknown."""
        bucket = self._buckets.get(_normalise(name), ())
        return tuple(entry.descriptor for entry in bucket)

    def first(self, name: str) -> TypeDescriptor | None:
        """Return the highest-priority descriptor for *name*, or None."""
        bucket = self._buckets.get(_normalise(name))
        return bucket[0].descriptor if bucket else None

    def all(self) -> dict[str, tuple[TypeDescriptor, ...]]:
        """Snapshot of the whole registry; mutating it does not affect the registry."""
        with self._lock:
            buckets = dict(self._buckets)
        return {
            key: tuple(entry.descriptor for entry in bucket)
            for key, bucket in sorted(buckets.items())
        }

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalise(name) in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
