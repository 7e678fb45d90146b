"""Indexable skip list with order statistics.

Besides the forward links of a classic skip list, every node stores per level
a *span*: how many level-0 positions separate it from its successor on that
level. Summing spans along a search path yields the rank of the node reached,
which gives access to the n-th element in expected logarithmic time.

Complexities (average case):
    • search / insert / delete     – O(log n)
    • rank lookup / rank update    – O(log n)
    • iterate                      – O(n)
    • len                          – O(1)

Node heights come from a deterministic per-list counter (see
:mod:`pyskip.levels`), so two lists fed the same operations have the same
shape. The list is not thread-safe; callers sharing one must serialise access.
"""
from __future__ import annotations

import logging
import operator
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Callable, Generic, Optional, TypeVar

from .config import MAX_LEVEL, Settings
from .errors import ConcurrentModificationError, ReentrantMutationError
from .levels import LevelGenerator
from .node import _Node, make_header, make_node
from .ordering import Comparator, natural_order

__all__ = ["SkipList", "MAX_LEVEL"]

K = TypeVar("K")
V = TypeVar("V")
D = TypeVar("D")

Cleanup = Callable[[K, V], None]

logger = logging.getLogger(__name__)


def _no_cleanup(key, value) -> None:
    pass


class SkipList(Generic[K, V]):
    """Sorted (key, value) container with access by 1-based rank.

    Parameters
    ----------
    compare:
        Three-way comparator over keys; natural ordering when omitted.
    cleanup:
        Called once with ``(key, value)`` for every pair that leaves the list
        through :meth:`delete` or :meth:`close`.
    max_level:
        Ceiling on node heights.
    seed:
        Starting value of the level counter.
    """

    def __init__(
        self,
        compare: Optional[Comparator] = None,
        cleanup: Optional[Cleanup] = None,
        *,
        max_level: int = MAX_LEVEL,
        seed: int = 0,
    ):
        self._levels = LevelGenerator(max_level, seed)
        self._max_level = max_level
        self._compare: Comparator = compare or natural_order
        self._cleanup: Cleanup = cleanup or _no_cleanup
        self._header: _Node[K, V] = make_header(max_level)
        self._level = 1
        self._length = 0
        self._version = 0
        self._busy: Optional[str] = None
        # Search cache: finger nodes and their ranks from the last search.
        self._finger: list[_Node[K, V]] = [self._header] * max_level
        self._distance: list[int] = [0] * max_level

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        compare: Optional[Comparator] = None,
        cleanup: Optional[Cleanup] = None,
    ) -> "SkipList[K, V]":
        return cls(compare, cleanup, max_level=settings.max_level, seed=settings.seed)

    # ------------------------------------------------------------------
    # Search engine
    # ------------------------------------------------------------------
    def _search_by_key(self, key: K) -> tuple[list[_Node[K, V]], list[int]]:
        """Locate the insertion point of ``key``.

        Returns ``(finger, delta)`` sized to the active level count:
        ``finger[i]`` is the last node on level ``i`` whose key is strictly
        less than ``key`` and ``delta[i]`` its rank (header = 0). Afterwards
        ``finger[0].forward[0]`` is the first node not less than ``key``.
        """
        level = self._level
        compare = self._compare
        header = self._header
        cache, distance = self._finger, self._distance
        finger: list[_Node[K, V]] = [header] * level
        delta = [0] * level
        x = header
        rank = 0
        for i in reversed(range(level)):
            cached = cache[i]
            if distance[i] > rank and compare(key, cached.key) > 0:
                x = cached
                rank = distance[i]
            while (nxt := x.forward[i]) is not None and compare(key, nxt.key) > 0:
                rank += x.span[i]
                x = nxt
            finger[i] = cache[i] = x
            delta[i] = distance[i] = rank
        return finger, delta

    def _search_by_rank(self, n: int) -> tuple[list[_Node[K, V]], bool]:
        """Locate the node of rank ``n``.

        ``finger[i]`` is the last node on level ``i`` with rank strictly less
        than ``n``; when ``found`` is true ``finger[0].forward[0]`` is the
        node at rank ``n``. Ranks that are not integers are never found.
        """
        try:
            n = operator.index(n)
        except TypeError:
            return [self._header] * self._level, False
        level = self._level
        cache, distance = self._finger, self._distance
        finger: list[_Node[K, V]] = [self._header] * level
        x = self._header
        rank = 0
        for i in reversed(range(level)):
            if rank < distance[i] < n:
                x = cache[i]
                rank = distance[i]
            while x.forward[i] is not None and rank + x.span[i] < n:
                rank += x.span[i]
                x = x.forward[i]  # type: ignore[assignment]
            finger[i] = cache[i] = x
            distance[i] = rank
        return finger, 1 <= n <= self._length

    def _reset_cache(self, start: int, stop: int) -> None:
        for i in range(start, stop):
            self._finger[i] = self._header
            self._distance[i] = 0

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    @contextmanager
    def _exclusive(self, operation: str):
        if self._busy is not None:
            raise ReentrantMutationError(
                f"cannot {operation}() from a callback while {self._busy}() is running"
            )
        self._busy = operation
        try:
            yield
        finally:
            self._busy = None

    @contextmanager
    def _reading(self, operation: str):
        # Reads may nest inside any running operation; they only block mutation.
        outer = self._busy
        if outer is None:
            self._busy = operation
        try:
            yield
        finally:
            self._busy = outer

    def insert(self, key: K, value: V) -> None:
        """Insert ``(key, value)``; equal keys are kept, newest first."""
        with self._exclusive("insert"):
            finger, delta = self._search_by_key(key)
            height = self._levels()
            node = make_node(key, value, height)
            header = self._header
            if height > self._level:
                for i in range(self._level, height):
                    finger.append(header)
                    delta.append(0)
                    header.span[i] = self._length + 1
                    self._finger[i] = header
                    self._distance[i] = 0
                logger.debug("Skip list grew from %d to %d levels", self._level, height)
                self._level = height

            # Spans first: they depend on the predecessors' old spans.
            d0 = delta[0]
            for i in range(height):
                pred = finger[i]
                offset = d0 - delta[i]
                node.span[i] = pred.span[i] - offset
                pred.span[i] = offset + 1
            for i in range(height, self._level):
                finger[i].span[i] += 1

            for i in range(height):
                pred = finger[i]
                node.forward[i] = pred.forward[i]
                pred.forward[i] = node
            self._length += 1
            self._version += 1

    def delete(self, key: K) -> int:
        """Remove every pair whose key compares equal to ``key``.

        Returns the number of pairs removed (0 if the key is absent).
        """
        removed = 0
        with self._exclusive("delete"):
            while self._delete_one(key):
                removed += 1
        return removed

    def _delete_one(self, key: K) -> bool:
        finger, _ = self._search_by_key(key)
        node = finger[0].forward[0]
        if node is None or self._compare(node.key, key) != 0:
            return False
        for i in range(self._level):
            pred = finger[i]
            if pred.forward[i] is not node:
                pred.span[i] -= 1
            else:
                pred.span[i] += node.span[i] - 1
                pred.forward[i] = node.forward[i]
        self._length -= 1
        self._version += 1
        self._shrink()
        self._cleanup(node.key, node.value)  # type: ignore[arg-type]
        return True

    def _shrink(self) -> None:
        old = self._level
        while self._level > 1 and self._header.forward[self._level - 1] is None:
            self._level -= 1
        if self._level != old:
            self._reset_cache(self._level, old)
            logger.debug("Skip list shrank from %d to %d levels", old, self._level)

    def indexed_update(self, rank: int, value: V) -> bool:
        """Replace the value at 1-based ``rank``; False if the rank is invalid."""
        with self._exclusive("indexed_update"):
            finger, found = self._search_by_rank(rank)
            if not found:
                return False
            finger[0].forward[0].value = value  # type: ignore[union-attr]
            return True

    def close(self) -> None:
        """Empty the list, handing every pair to ``cleanup`` in ascending order."""
        with self._exclusive("close"):
            header = self._header
            first = header.forward[0]
            header.forward = [None] * self._max_level
            header.span = [1] * self._max_level
            self._reset_cache(0, self._max_level)
            count = self._length
            self._level = 1
            self._length = 0
            self._version += 1
            x = first
            while x is not None:
                self._cleanup(x.key, x.value)  # type: ignore[arg-type]
                x = x.forward[0]
            logger.debug("Skip list closed, released %d entries", count)

    def __enter__(self) -> "SkipList[K, V]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def search(self, key: K, default: Optional[D] = None) -> V | D | None:
        """Value of the newest pair with key ``key``, else ``default``."""
        finger, _ = self._search_by_key(key)
        x = finger[0].forward[0]
        if x is not None and self._compare(key, x.key) == 0:
            return x.value
        return default

    def __contains__(self, key: K) -> bool:
        finger, _ = self._search_by_key(key)
        x = finger[0].forward[0]
        return x is not None and self._compare(key, x.key) == 0

    def indexed_key(self, rank: int, default: Optional[D] = None) -> K | D | None:
        """Key at 1-based ``rank``, or ``default`` outside ``[1, len]``."""
        finger, found = self._search_by_rank(rank)
        if found:
            return finger[0].forward[0].key  # type: ignore[union-attr]
        return default

    def indexed_value(self, rank: int, default: Optional[D] = None) -> V | D | None:
        """Value at 1-based ``rank``, or ``default`` outside ``[1, len]``."""
        finger, found = self._search_by_rank(rank)
        if found:
            return finger[0].forward[0].value  # type: ignore[union-attr]
        return default

    @property
    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    @property
    def level(self) -> int:
        """Number of levels currently in use."""
        return self._level

    @property
    def max_level(self) -> int:
        return self._max_level

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[tuple[K, V]]:
        version = self._version
        x = self._header.forward[0]
        while x is not None:
            yield x.key, x.value  # type: ignore[misc]
            if self._version != version:
                raise ConcurrentModificationError("skip list changed during iteration")
            x = x.forward[0]

    def iterate(self, visitor: Callable[[K, V], object]) -> None:
        """Call ``visitor(key, value)`` for every pair in ascending order."""
        with self._reading("iterate"):
            for key, value in self:
                visitor(key, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"
