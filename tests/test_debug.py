"""Unit tests for the structural checker and dumper."""
import pytest

from pyskip import SkipList
from pyskip.debug import check, dump


@pytest.fixture
def small():
    """Four-element list with heights 1, 2, 1, 3."""
    sl = SkipList(seed=0)
    for k in (10, 20, 30, 40):
        sl.insert(k, str(k))
    return sl


def test_check_accepts_valid_list(small):
    """A list built through the public API passes."""
    check(small)


def test_check_detects_bad_span(small):
    """Corrupted span counters are caught."""
    small._header.span[0] += 1
    with pytest.raises(AssertionError):
        check(small)


def test_check_detects_bad_length(small):
    """A length that disagrees with level 0 is caught."""
    small._length += 1
    with pytest.raises(AssertionError):
        check(small)


def test_check_detects_disorder(small):
    """Keys out of comparator order are caught."""
    small._header.forward[0].key = 99
    with pytest.raises(AssertionError):
        check(small)


def test_dump(small):
    """dump lists one line per node plus a header line."""
    text = dump(small)
    lines = text.splitlines()
    assert lines[0] == "== SkipList level=3/20 length=4"
    assert len(lines) == 6
    assert "#4 key=40 value='40' height=3" in lines[-1]
