"""Three-way comparators usable as the ``compare`` argument of a SkipList.

A comparator returns a negative number, zero or a positive number as its first
argument sorts before, equal to or after the second.
"""
from __future__ import annotations

from typing import Any, Callable

__all__ = ["Comparator", "natural_order", "reverse_order", "by_key"]

Comparator = Callable[[Any, Any], int]


def natural_order(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def reverse_order(a: Any, b: Any) -> int:
    return (a < b) - (a > b)


def by_key(func: Callable[[Any], Any]) -> Comparator:
    """Compare keys by ``func(key)``, e.g. ``by_key(str.lower)``."""

    def compare(a: Any, b: Any) -> int:
        return natural_order(func(a), func(b))

    compare.__name__ = f"by_key({getattr(func, '__name__', func)!s})"
    return compare
