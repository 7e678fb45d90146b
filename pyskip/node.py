"""Node records of the skip list.

Every node carries, per level it takes part in, a forward link and a *span*:
the number of level-0 steps from the node to its successor on that level (or
to the virtual position ``length + 1`` when it is the last node there).
"""
from __future__ import annotations

import logging
from typing import Generic, Optional, TypeVar

from .errors import AllocationError

__all__ = ["make_node", "make_header"]

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)


class _Node(Generic[K, V]):
    __slots__ = ("key", "value", "forward", "span")

    def __init__(self, key: Optional[K], value: Optional[V], height: int):
        self.key = key
        self.value = value
        self.forward: list[Optional[_Node[K, V]]] = [None] * height
        self.span: list[int] = [0] * height

    @property
    def height(self) -> int:
        return len(self.forward)

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.key!r}:{self.value!r} h={self.height}>"


def make_node(key: K, value: V, height: int) -> _Node[K, V]:
    """Allocate a detached node of the given height."""
    try:
        return _Node(key, value, height)
    except MemoryError as exc:
        logger.critical("Out of memory allocating node of height %d", height)
        raise AllocationError(f"cannot allocate skip list node of height {height}") from exc


def make_header(max_level: int) -> _Node:
    """Sentinel present on every level; spans start at 1 (empty list)."""
    header: _Node = make_node(None, None, max_level)
    header.span = [1] * max_level
    return header
