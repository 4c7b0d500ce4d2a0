"""Tests for take operation."""

import pytest

import asyncseq as s
from asyncseq.steps import take


class TestTake:

    @pytest.mark.asyncio
    async def test_basic_take(self):
        """Test basic take functionality."""
        result = await ([1, 2, 3, 4, 5, 6, 7, 8] | take(3)).collect()
        assert result == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_take_zero_never_advances_upstream(self, recording):
        """Test take with zero items."""
        upstream = recording([1, 2, 3, 4, 5])
        result = await (upstream | take(0)).collect()

        assert result == []
        assert upstream.advances == 0
        assert upstream.disposals == 1

    @pytest.mark.asyncio
    async def test_take_does_not_pull_extra_element(self, recording):
        upstream = recording(range(10))
        result = await (upstream | take(3)).collect()

        assert result == [0, 1, 2]
        assert upstream.advances == 3

    @pytest.mark.asyncio
    async def test_take_more_than_available(self):
        """Test take with count greater than available items."""
        result = await ([1, 2, 3] | take(10)).collect()
        assert result == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_take_with_empty_input(self):
        """Test take with empty input."""
        assert await ([] | take(5)).collect() == []

    @pytest.mark.asyncio
    async def test_nested_pipeline_with_take(self):
        """Test more complex pipeline composition with Take"""
        transform = s.Map(lambda x: x * 3) | s.Filter(lambda x: x > 5)

        result = await (range(5) | transform | s.Take(2)).collect()
        assert result == [6, 9]  # 0*3=0(filtered), 1*3=3(filtered), 2*3=6, 3*3=9, take 2

    @pytest.mark.parametrize("n", [-1, 1.5, "3", True])
    def test_invalid_counts_are_rejected(self, n):
        with pytest.raises(s.InvalidArgument):
            s.Take(n)
