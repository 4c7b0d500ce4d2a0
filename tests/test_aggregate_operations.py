"""Tests for aggregate terminal operations."""

import pytest

import asyncseq as s


async def test_all_and_any():
    assert await s.all_([2, 4, 6], lambda x: x % 2 == 0)
    assert not await s.all_([2, 3, 6], lambda x: x % 2 == 0)
    assert await s.all_([], lambda x: False)

    assert await s.any_([0])
    assert not await s.any_([])
    assert await s.any_([1, 2, 3], lambda x: x > 2)
    assert not await s.any_([1, 2, 3], lambda x: x > 3)


async def test_all_short_circuits(recording):
    upstream = recording([1, 2, 3, 4])
    assert not await s.all_(upstream, lambda x: x < 2)
    assert upstream.advances == 2
    assert upstream.disposals == 1


async def test_any_short_circuits(recording):
    upstream = recording(range(100))
    assert await s.any_(upstream)
    assert upstream.advances == 1


async def test_count():
    assert await s.count([]) == 0
    assert await s.count(range(1000)) == 1000
    assert await s.count(range(10), lambda x: x % 3 == 0) == 4

    async def is_odd(x):
        return x % 2 == 1

    assert await s.count(range(10), is_odd) == 5


async def test_contains():
    assert await s.contains([1, 2, 3], 2)
    assert not await s.contains([1, 2, 3], 4)
    assert not await s.contains([], None)
    assert await s.contains(["Alpha", "Beta"], "beta", s.KeyComparer(str.lower))


async def test_sequence_equals():
    assert await s.sequence_equals([1, 2, 3], [1, 2, 3])
    assert await s.sequence_equals([], [])
    assert not await s.sequence_equals([1, 2, 3], [1, 2])
    assert not await s.sequence_equals([1, 2], [1, 2, 3])
    assert not await s.sequence_equals([1, 2, 3], [1, 5, 3])
    assert await s.sequence_equals(
        ["a", "B"], ["A", "b"], comparer=s.KeyComparer(str.upper)
    )


async def test_sequence_equals_disposes_both(recording):
    first = recording([1, 2, 3])
    second = recording([1, 9, 3])
    assert not await s.sequence_equals(first, second)
    assert first.disposals == 1
    assert second.disposals == 1


class TestReduce:
    @pytest.mark.asyncio
    async def test_reduce_without_initial(self):
        assert await s.reduce([1, 2, 3, 4, 5], lambda acc, x: acc + x) == 15

    @pytest.mark.asyncio
    async def test_reduce_with_initial(self):
        assert await s.reduce([2, 3, 4], lambda acc, x: acc * x, 1) == 24
        assert await s.reduce([], lambda acc, x: acc + x, "empty") == "empty"

    @pytest.mark.asyncio
    async def test_reduce_with_none_initial(self):
        assert await s.reduce([], lambda acc, x: x, None) is None

    @pytest.mark.asyncio
    async def test_reduce_empty_without_initial(self):
        with pytest.raises(s.EmptySequenceError):
            await s.reduce([], lambda acc, x: acc + x)

    @pytest.mark.asyncio
    async def test_async_reducer(self):
        async def concat(acc, x):
            return acc + x

        assert await s.reduce(["a", "b", "c"], concat) == "abc"


async def test_for_each():
    seen = []
    await s.for_each(range(3), seen.append)
    assert seen == [0, 1, 2]


async def test_for_each_awaits_async_action():
    seen = []

    async def record(x):
        seen.append(x)

    await s.for_each(range(1, 6) | s.Map(lambda x: x * x), record)
    assert seen == [1, 4, 9, 16, 25]


async def test_for_each_async_receives_token():
    token = s.CancellationToken()
    received = []

    async def action(x, t):
        received.append((x, t))

    await s.for_each_async(["a", "b"], action, token=token)
    assert received == [("a", token), ("b", token)]


async def test_action_errors_propagate(recording):
    upstream = recording([1, 2, 3])

    def action(x):
        if x == 2:
            raise KeyError("boom")

    with pytest.raises(KeyError):
        await s.for_each(upstream, action)
    assert upstream.disposals == 1
