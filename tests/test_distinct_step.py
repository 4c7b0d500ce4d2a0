import pytest

import asyncseq as s
from asyncseq.steps import distinct


async def test_distinct_operation():
    """Test Distinct operation"""
    pipeline = [1, 2, 2, 3, 1, 4] | s.Distinct()
    result = await pipeline.collect()
    assert result == [1, 2, 3, 4]


async def test_distinct_with_key_function():
    """Test Distinct with key function"""
    pipeline = ["a", "bb", "c", "dd", "eee"] | s.Distinct(key=len)
    result = await pipeline.collect()
    assert result == ["a", "bb", "eee"]  # Unique by length


async def test_distinct_with_comparer():
    words = ["Hello", "world", "HELLO", "World"]
    result = await (words | distinct(s.KeyComparer(str.lower))).collect()
    assert result == ["Hello", "world"]


async def test_distinct_handles_unhashable_items():
    users = [{"id": 1}, {"id": 2}, {"id": 1}]
    result = await (users | s.Distinct()).collect()
    assert result == [{"id": 1}, {"id": 2}]


async def test_distinct_warns_when_tracking_many_unhashable_items():
    items = [[i] for i in range(3)]
    with pytest.warns(UserWarning, match="max unhashable items"):
        await (items | s.Distinct(max_unhashable_items=2)).collect()


@pytest.mark.parametrize(
    "items",
    [[], [1], [3, 3, 3], [5, 1, 5, 2, 1, 9, 2], list("mississippi")],
)
async def test_distinct_is_idempotent(items):
    once = await (items | s.Distinct()).collect()
    twice = await (items | s.Distinct() | s.Distinct()).collect()
    assert twice == once


async def test_each_cursor_tracks_its_own_seen_set():
    sequence = [1, 1, 2] | s.Distinct()
    assert await sequence.collect() == [1, 2]
    assert await sequence.collect() == [1, 2]


def test_distinct_rejects_invalid_comparer():
    with pytest.raises(s.InvalidArgument):
        s.Distinct(object())
