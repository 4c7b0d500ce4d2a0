"""Tests for materializing sequences into containers."""

from dataclasses import dataclass

import pytest

import asyncseq as s


@dataclass
class Planet:
    name: str
    mass: float


async def test_to_list_preserves_order():
    assert await s.to_list([3, 1, 2]) == [3, 1, 2]
    assert await s.to_list(s.empty()) == []


async def test_to_tuple():
    result = await s.to_tuple(range(3) | s.Map(str))
    assert result == ("0", "1", "2")


async def test_to_set():
    assert await s.to_set([1, 2, 2, 3, 1]) == {1, 2, 3}


async def test_to_dict():
    planets = [Planet("Mercury", 0.33), Planet("Venus", 4.87)]
    result = await s.to_dict(planets, lambda p: p.name, lambda p: p.mass)
    assert result == {"Mercury": 0.33, "Venus": 4.87}
    assert list(result) == ["Mercury", "Venus"]


async def test_to_dict_rejects_duplicate_keys(recording):
    upstream = recording(["apple", "avocado", "banana"])

    with pytest.raises(s.DuplicateKeyError) as exc_info:
        await s.to_dict(upstream, lambda w: w[0], len)

    assert exc_info.value.key == "a"
    assert str(exc_info.value) == "to_dict: duplicate key 'a'"
    assert upstream.disposals == 1


async def test_collect_from_async_generator():
    async def numbers():
        for i in range(4):
            yield i

    assert await s.to_list(s.from_async_iterable(numbers())) == [0, 1, 2, 3]
    # async iterables are accepted directly as well
    assert await s.to_list(numbers()) == [0, 1, 2, 3]
