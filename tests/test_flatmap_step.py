import asyncio

import asyncseq as s
from asyncseq.steps import flat_map


async def test_flatmap_operation():
    """Test FlatMap operation"""
    pipeline = ["hello world", "python rocks"] | s.FlatMap(str.split)
    result = await pipeline.collect()
    assert result == ["hello", "world", "python", "rocks"]


async def test_flatmap_preserves_outer_then_inner_order():
    result = await ([3, 2, 4] | flat_map(range)).collect()
    assert result == [0, 1, 2, 0, 1, 0, 1, 2, 3]


async def test_flatmap_with_empty_inner_iterables():
    result = await ([[], [1], [], [2, 3]] | s.FlatMap(lambda x: x)).collect()
    assert result == [1, 2, 3]


async def test_flatmap_with_inner_sequences():
    result = await (
        [1, 2] | s.FlatMap(lambda x: [x, x] | s.Map(lambda y: y * 10))
    ).collect()
    assert result == [10, 10, 20, 20]


async def test_flatmap_with_async_generators():
    async def expand(x):
        for i in range(x):
            await asyncio.sleep(0)
            yield (x, i)

    result = await ([1, 2] | s.FlatMap(expand)).collect()
    assert result == [(1, 0), (2, 0), (2, 1)]


async def test_flatmap_with_async_selector():
    async def lookup(x):
        await asyncio.sleep(0.001)
        return [x] * x

    result = await ([1, 2, 3] | s.FlatMap(lookup)).collect()
    assert result == [1, 2, 2, 3, 3, 3]


async def test_flatmap_disposes_inner_and_outer(recording):
    outer = recording([1, 2])
    inners = []

    def selector(x):
        inner = recording(range(x))
        inners.append(inner)
        return inner

    assert await s.first(outer | s.FlatMap(selector), lambda x: x == 1) == 1

    assert outer.disposals == 1
    assert [inner.disposals for inner in inners] == [1, 1]
