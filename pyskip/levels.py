"""Deterministic level assignment.

Instead of flipping coins, the height of a new node is derived from a counter:
``1 + number of trailing one bits`` of the counter value before it is
incremented. Over any run of ``2**k`` calls this yields level 1 half of the
time, level 2 a quarter of the time and so on, which is the shape of the
classic p=0.5 geometric distribution, but fully reproducible.
"""
from __future__ import annotations

__all__ = ["LevelGenerator"]


class LevelGenerator:
    """Per-list level source.

    Parameters
    ----------
    max_level: int
        Ceiling for returned levels.
    start: int
        Initial counter value; lists built with the same start and the same
        operation sequence get identical shapes.
    """

    __slots__ = ("_max_level", "_counter")

    def __init__(self, max_level: int, start: int = 0):
        if max_level < 1:
            raise ValueError(f"max_level must be >= 1, got {max_level}")
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        self._max_level = max_level
        self._counter = start

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def max_level(self) -> int:
        return self._max_level

    def __call__(self) -> int:
        c = self._counter
        self._counter = c + 1
        # lowest clear bit of c, as a position: trailing ones + 1
        level = (~c & (c + 1)).bit_length()
        return level if level < self._max_level else self._max_level
