"""Structural checks for skip lists.

``check`` walks every level and asserts the invariants the search engine
relies on; the test-suite runs it after each mutation. ``dump`` renders the
node layout for eyeballing.
"""
from __future__ import annotations

from .skiplist import SkipList

__all__ = ["check", "dump"]


def check(sl: SkipList) -> None:
    """Check the internal structure of ``sl``; raise AssertionError if broken."""
    header = sl._header
    level = sl._level
    assert 1 <= level <= sl._max_level
    assert len(header.forward) == len(header.span) == sl._max_level
    if level > 1:
        assert header.forward[level - 1] is not None, "top level is empty"

    # Level 0 fixes the rank of every node.
    ranks = {id(header): 0}
    heights = [0] * level
    prev = None
    rank = 0
    x = header.forward[0]
    while x is not None:
        rank += 1
        ranks[id(x)] = rank
        assert 1 <= x.height <= level, f"bad height {x.height} at rank {rank}"
        assert len(x.span) == x.height
        if prev is not None:
            assert sl._compare(prev.key, x.key) <= 0, f"keys out of order at rank {rank}"
        for i in range(x.height):
            heights[i] += 1
        prev, x = x, x.forward[0]
    assert rank == sl._length, f"length {sl._length} but {rank} nodes reachable"

    for i in range(level):
        pos, count = 0, 0
        x = header
        while (nxt := x.forward[i]) is not None:
            assert id(nxt) in ranks, f"level {i} links to a detached node"
            assert ranks[id(nxt)] - pos == x.span[i], f"bad span at level {i}, rank {pos}"
            pos = ranks[id(nxt)]
            count += 1
            x = nxt
        assert x.span[i] == sl._length + 1 - pos, f"bad tail span at level {i}"
        assert count == heights[i], f"level {i} skips nodes that belong to it"

    for i in range(level):
        cached = sl._finger[i]
        assert id(cached) in ranks, f"cache at level {i} points at a detached node"
        assert ranks[id(cached)] == sl._distance[i], f"stale cached rank at level {i}"
        assert cached is header or cached.height > i


def dump(sl: SkipList) -> str:
    """Format the node layout of ``sl``, one line per node."""
    lines = [f"== {type(sl).__name__} level={sl.level}/{sl.max_level} length={len(sl)}"]
    spans = sl._header.span[: sl.level]
    lines.append(f"(head) spans={spans}")
    x = sl._header.forward[0]
    rank = 0
    while x is not None:
        rank += 1
        lines.append(f"#{rank} key={x.key!r} value={x.value!r} height={x.height} spans={x.span}")
        x = x.forward[0]
    return "\n".join(lines)
