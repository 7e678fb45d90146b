"""pyskip: an indexable skip list for Python.

The package exposes :class:`pyskip.SkipList`, a sorted (key, value) container
with expected logarithmic search, insertion and deletion, plus access to the
n-th element by rank. Snapshots (``pyskip.codec``), comparators
(``pyskip.ordering``) and structural checks (``pyskip.debug``) live in their
own modules.
"""

from __future__ import annotations

__all__ = [
    "SkipList",
    "MAX_LEVEL",
    "Settings",
    "SkipListError",
    "AllocationError",
    "ReentrantMutationError",
    "ConcurrentModificationError",
    "SnapshotError",
    "natural_order",
    "reverse_order",
    "by_key",
]

from .config import MAX_LEVEL, Settings
from .errors import (
    AllocationError,
    ConcurrentModificationError,
    ReentrantMutationError,
    SkipListError,
    SnapshotError,
)
from .ordering import by_key, natural_order, reverse_order
from .skiplist import SkipList
