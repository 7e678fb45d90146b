"""Unit tests for deterministic level assignment."""
from collections import Counter

import pytest

from pyskip.levels import LevelGenerator


def test_first_levels():
    """Level is one plus the trailing one bits of the counter."""
    gen = LevelGenerator(20)
    assert [gen() for _ in range(8)] == [1, 2, 1, 3, 1, 2, 1, 4]
    assert gen.counter == 8


def test_geometric_shape():
    """Each level appears half as often as the one below it."""
    gen = LevelGenerator(20)
    counts = Counter(gen() for _ in range(1024))
    for level in range(1, 11):
        assert counts[level] == 1024 >> level
    assert counts[11] == 1  # counter 1023, all ten bits set


def test_ceiling():
    """Levels saturate at max_level."""
    gen = LevelGenerator(3)
    assert [gen() for _ in range(8)] == [1, 2, 1, 3, 1, 2, 1, 3]
    assert gen.max_level == 3


def test_start_offset():
    """The starting counter fixes the sequence."""
    gen = LevelGenerator(20, start=15)
    assert gen() == 5
    assert gen() == 1


def test_invalid_arguments():
    """Nonsensical bounds are rejected."""
    with pytest.raises(ValueError):
        LevelGenerator(0)
    with pytest.raises(ValueError):
        LevelGenerator(4, start=-1)
