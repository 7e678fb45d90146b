"""msgpack snapshots of skip lists.

A snapshot is an in-memory byte string, handy for shipping a list between
processes or caching it; nothing here touches the filesystem.

Layout (msgpack array)::

    [version, max_level, [[key, value], ...]]   # pairs in ascending order

Sequences unpack as tuples, so tuple keys survive a round trip and stay
comparable with each other. ``max_level`` must be an int in
``[1, MAX_SNAPSHOT_LEVEL]``; larger lists cannot be snapshotted.
"""
from __future__ import annotations

from typing import Optional

import msgpack

from .errors import SnapshotError
from .ordering import Comparator
from .skiplist import Cleanup, SkipList

__all__ = ["dumps", "loads", "FORMAT_VERSION", "MAX_SNAPSHOT_LEVEL"]

FORMAT_VERSION = 1
MAX_SNAPSHOT_LEVEL = 64  # bounds the header a decoded blob can allocate


def dumps(sl: SkipList) -> bytes:
    """Encode ``sl`` (pairs in ascending order) as msgpack bytes."""
    if sl.max_level > MAX_SNAPSHOT_LEVEL:
        raise SnapshotError(f"max_level {sl.max_level} exceeds snapshot ceiling {MAX_SNAPSHOT_LEVEL}")
    items = [(k, v) for k, v in sl]
    return msgpack.packb((FORMAT_VERSION, sl.max_level, items), use_bin_type=True)


def loads(
    blob: bytes,
    compare: Optional[Comparator] = None,
    cleanup: Optional[Cleanup] = None,
) -> SkipList:
    """Rebuild a skip list from :func:`dumps` output.

    ``compare`` must order the keys the same way the encoded list did.
    """
    try:
        payload = msgpack.unpackb(blob, raw=False, use_list=False)
    except (msgpack.UnpackException, ValueError, TypeError) as exc:
        raise SnapshotError(f"cannot decode snapshot: {exc}") from exc
    if not isinstance(payload, tuple) or len(payload) != 3:
        raise SnapshotError("snapshot must be a [version, max_level, items] array")
    version, max_level, items = payload
    if isinstance(version, bool) or version != FORMAT_VERSION:
        raise SnapshotError(f"unsupported snapshot version {version!r}")
    if isinstance(max_level, bool) or not isinstance(max_level, int) or not 1 <= max_level <= MAX_SNAPSHOT_LEVEL:
        raise SnapshotError(f"invalid max_level {max_level!r}")
    if not isinstance(items, tuple) or not all(isinstance(p, tuple) and len(p) == 2 for p in items):
        raise SnapshotError("snapshot items must be [key, value] pairs")

    sl: SkipList = SkipList(compare, cleanup, max_level=max_level)
    for (prev, _), (key, _) in zip(items, items[1:]):
        try:
            out_of_order = sl._compare(prev, key) > 0
        except TypeError as exc:
            raise SnapshotError(f"snapshot keys not comparable: {prev!r}, {key!r}") from exc
        if out_of_order:
            raise SnapshotError(f"snapshot keys out of order: {prev!r} > {key!r}")
    # Equal keys go in front of each other, so feeding pairs back to front
    # restores their original relative order.
    for key, value in reversed(items):
        sl.insert(key, value)
    return sl
