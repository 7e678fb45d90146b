"""Unit tests for msgpack snapshots."""
import msgpack
import pytest

from pyskip import SkipList, SnapshotError, reverse_order
from pyskip.codec import FORMAT_VERSION, MAX_SNAPSHOT_LEVEL, dumps, loads
from pyskip.debug import check


@pytest.fixture
def populated():
    """Skip list with string keys, bytes values and a duplicate key."""
    sl = SkipList(max_level=8)
    sl.insert("b", b"\x01")
    sl.insert("a", b"\x00")
    sl.insert("b", b"\x02")
    sl.insert("c", b"")
    return sl


def test_snapshot_restores_pairs(populated):
    """Order, duplicates and values survive a snapshot."""
    restored = loads(dumps(populated))
    assert list(restored) == list(populated)
    assert restored.max_level == 8
    assert restored.search("b") == b"\x02"
    check(restored)


def test_snapshot_of_empty_list():
    """An empty list snapshots to an empty list."""
    restored = loads(dumps(SkipList()))
    assert len(restored) == 0
    check(restored)


def test_tuple_keys():
    """Sequence keys come back as tuples."""
    sl = SkipList()
    sl.insert((2, "x"), 1)
    sl.insert((1, "y"), 2)
    restored = loads(dumps(sl))
    assert [k for k, _ in restored] == [(1, "y"), (2, "x")]
    assert restored.search((2, "x")) == 1


def test_custom_comparator_and_cleanup():
    """loads accepts the comparator the list was built with."""
    sl = SkipList(reverse_order)
    for k in (1, 3, 2):
        sl.insert(k, k)
    released = []
    restored = loads(dumps(sl), reverse_order, lambda k, v: released.append(k))
    assert [k for k, _ in restored] == [3, 2, 1]
    restored.close()
    assert released == [3, 2, 1]


def test_out_of_order_snapshot_rejected():
    """Decoding with a comparator that disagrees with the data fails."""
    sl = SkipList()
    for k in (1, 2, 3):
        sl.insert(k, k)
    with pytest.raises(SnapshotError):
        loads(dumps(sl), reverse_order)


@pytest.mark.parametrize(
    "blob",
    [
        b"\xc1",  # never-used msgpack byte
        msgpack.packb([FORMAT_VERSION, 4]),
        msgpack.packb([FORMAT_VERSION + 1, 4, []]),
        msgpack.packb([FORMAT_VERSION, 0, []]),
        msgpack.packb([FORMAT_VERSION, 4, [[1, 2, 3]]]),
        msgpack.packb({"version": FORMAT_VERSION}),
        msgpack.packb([True, 4, []]),
        msgpack.packb([FORMAT_VERSION, True, []]),
        msgpack.packb([FORMAT_VERSION, 2**40, []]),
        msgpack.packb([FORMAT_VERSION, MAX_SNAPSHOT_LEVEL + 1, []]),
        msgpack.packb([FORMAT_VERSION, 4, [[1, 0], ["a", 0]]]),
    ],
)
def test_malformed_snapshots(blob):
    """Garbage is reported as SnapshotError."""
    with pytest.raises(SnapshotError):
        loads(blob)


def test_snapshot_error_is_value_error():
    """Callers can catch snapshot problems as ValueError."""
    with pytest.raises(ValueError):
        loads(b"")


def test_oversized_list_not_snapshotted():
    """Lists taller than the snapshot ceiling are refused on encode."""
    with pytest.raises(SnapshotError):
        dumps(SkipList(max_level=MAX_SNAPSHOT_LEVEL + 1))


def test_ceiling_list_round_trips():
    """A list exactly at the ceiling still encodes and decodes."""
    sl = SkipList(max_level=MAX_SNAPSHOT_LEVEL)
    sl.insert(1, "one")
    restored = loads(dumps(sl))
    assert restored.max_level == MAX_SNAPSHOT_LEVEL
    assert list(restored) == [(1, "one")]
