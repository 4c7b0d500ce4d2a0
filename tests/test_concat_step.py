import pytest

import asyncseq as s
from asyncseq.steps import append, append_all, concat, prepend, prepend_all


async def test_concat_operation():
    result = await ([1, 2] | s.Concat([3, 4])).collect()
    assert result == [1, 2, 3, 4]


@pytest.mark.parametrize(
    "a, b", [([], []), ([1], []), ([], [1, 2]), ([1, 2, 3], [4, 5])]
)
async def test_concat_length_law(a, b):
    assert await s.count(a | concat(b)) == len(a) + len(b)


async def test_concat_accepts_sequences():
    tail = ["c"] | s.Map(str.upper)
    assert await (["a", "b"] | s.Concat(tail)).collect() == ["a", "b", "C"]


async def test_append_single_element():
    assert await ([1, 2] | append(3)).collect() == [1, 2, 3]


async def test_append_treats_iterable_as_single_element():
    assert await ([[1]] | s.Append([2])).collect() == [[1], [2]]


async def test_append_all_from_iterable():
    assert await ([1] | append_all((2, 3))).collect() == [1, 2, 3]


async def test_prepend_single_element():
    assert await ([2, 3] | prepend(1)).collect() == [1, 2, 3]


async def test_prepend_all_from_sequence():
    head = s.from_iterable([0, 1])
    assert await ([2] | prepend_all(head)).collect() == [0, 1, 2]


async def test_prepend_does_not_touch_source_early(recording):
    upstream = recording([2, 3])

    async with (upstream | s.Prepend(1)).cursor() as cursor:
        assert await cursor.advance()
        assert cursor.current == 1
        assert upstream.cursors == 0

        assert await cursor.advance()
        assert cursor.current == 2
        assert upstream.advances == 1


async def test_concat_disposes_both_upstreams_once_on_failure(recording):
    first = recording([1, 2])
    second = recording([3, 4, 5], fail_at=1)

    seen = []
    with pytest.raises(RuntimeError, match="upstream failure"):
        async for item in first | s.Concat(second):
            seen.append(item)

    assert seen == [1, 2, 3]
    assert first.disposals == 1
    assert second.disposals == 1


def test_concat_rejects_missing_other():
    with pytest.raises(s.InvalidArgument):
        s.Concat(None)
