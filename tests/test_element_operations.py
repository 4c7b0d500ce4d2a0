"""Tests for first, last, single and element_at."""

import pytest

import asyncseq as s


class TestFirst:
    @pytest.mark.asyncio
    async def test_first_element(self):
        assert await s.first([3, 1, 2]) == 3

    @pytest.mark.asyncio
    async def test_first_matching(self):
        assert await s.first(range(100), lambda x: x > 41) == 42

    @pytest.mark.asyncio
    async def test_first_stops_pulling(self, recording):
        upstream = recording(range(100))
        assert await s.first(upstream, lambda x: x == 3) == 3
        assert upstream.advances == 4
        assert upstream.disposals == 1

    @pytest.mark.asyncio
    async def test_async_predicate(self):
        async def is_even(x):
            return x % 2 == 0

        assert await s.first([1, 3, 4, 6], is_even) == 4

    @pytest.mark.asyncio
    async def test_first_or_default(self):
        assert await s.first_or_default([]) is None
        assert await s.first_or_default([], default=-1) == -1
        assert await s.first_or_default([1, 3], lambda x: x > 5, default=0) == 0
        assert await s.first_or_default([1, 7], lambda x: x > 5) == 7


class TestLast:
    @pytest.mark.asyncio
    async def test_last_element(self):
        assert await s.last([3, 1, 2]) == 2

    @pytest.mark.asyncio
    async def test_last_matching(self):
        assert await s.last(range(10), lambda x: x % 3 == 0) == 9

    @pytest.mark.asyncio
    async def test_last_none_element(self):
        # None is a legitimate element, not an absence marker
        assert await s.last([1, None]) is None

    @pytest.mark.asyncio
    async def test_last_faults(self):
        with pytest.raises(s.EmptySequenceError):
            await s.last([])
        with pytest.raises(s.NoMatchedItemsError):
            await s.last([1, 2], lambda x: x > 2)

    @pytest.mark.asyncio
    async def test_last_or_default(self):
        assert await s.last_or_default([]) is None
        assert await s.last_or_default([1, 2, 3]) == 3
        assert await s.last_or_default([1, 2], lambda x: x > 2, default="none") == "none"


class TestSingle:
    @pytest.mark.asyncio
    async def test_single_element(self):
        assert await s.single(["only"]) == "only"

    @pytest.mark.asyncio
    async def test_single_matching(self):
        assert await s.single([1, 2, 3], lambda x: x == 2) == 2

    @pytest.mark.asyncio
    async def test_single_with_multiple_matches(self):
        with pytest.raises(s.MultipleMatchesError):
            await s.single([1, 2, 3, 4], lambda x: x % 2 == 0)

    @pytest.mark.asyncio
    async def test_single_stops_at_second_match(self, recording):
        upstream = recording([1, 1, 2, 3])
        with pytest.raises(s.MultipleMatchesError):
            await s.single(upstream)
        assert upstream.advances == 2
        assert upstream.disposals == 1

    @pytest.mark.asyncio
    async def test_single_faults(self):
        with pytest.raises(s.EmptySequenceError):
            await s.single([])
        with pytest.raises(s.NoMatchedItemsError):
            await s.single([1], lambda x: x > 1)

    @pytest.mark.asyncio
    async def test_single_or_default(self):
        assert await s.single_or_default([]) is None
        assert await s.single_or_default([5]) == 5
        assert await s.single_or_default([1, 2], lambda x: x > 2, default=0) == 0
        with pytest.raises(s.MultipleMatchesError):
            await s.single_or_default([0, 1])


class TestElementAt:
    @pytest.mark.asyncio
    async def test_element_at(self):
        assert await s.element_at("abcdef", 0) == "a"
        assert await s.element_at("abcdef", 4) == "e"

    @pytest.mark.asyncio
    async def test_element_at_out_of_range(self):
        with pytest.raises(s.IndexOutOfRange) as exc_info:
            await s.element_at([1, 2], 2)
        assert exc_info.value.index == 2
        assert isinstance(exc_info.value, IndexError)

    @pytest.mark.asyncio
    async def test_element_at_or_default(self):
        assert await s.element_at_or_default([1, 2], 5) is None
        assert await s.element_at_or_default([1, 2], 5, default=0) == 0
        assert await s.element_at_or_default([1, 2], 1) == 2

    def test_element_at_rejects_bad_index(self):
        with pytest.raises(s.InvalidArgument):
            s.element_at([1], "0")
        with pytest.raises(s.InvalidArgument):
            s.element_at_or_default([1], -3)
