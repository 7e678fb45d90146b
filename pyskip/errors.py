"""Exception types raised by :mod:`pyskip`.

Absence is never an error: missing keys and out-of-range ranks are reported
through return values. The classes below cover contract violations and
fatal conditions only.
"""
from __future__ import annotations

__all__ = [
    "SkipListError",
    "AllocationError",
    "ReentrantMutationError",
    "ConcurrentModificationError",
    "SnapshotError",
]


class SkipListError(Exception):
    """Base class for all pyskip errors."""


class AllocationError(SkipListError, MemoryError):
    """A node could not be allocated."""


class ReentrantMutationError(SkipListError, RuntimeError):
    """A callback tried to mutate the list that is currently running it."""


class ConcurrentModificationError(SkipListError, RuntimeError):
    """The list changed while an iterator over it was still in flight."""


class SnapshotError(SkipListError, ValueError):
    """A snapshot blob could not be decoded into a skip list."""
