"""Tests for cooperative cancellation through CancellationToken."""

import asyncio

import pytest

import asyncseq as s


async def test_cancelled_token_stops_advance(recording):
    upstream = recording(range(10))
    token = s.CancellationToken()

    async with (upstream | s.Map(lambda x: x)).cursor(token) as cursor:
        assert await cursor.advance()
        token.cancel()
        with pytest.raises(s.OperationCancelled):
            await cursor.advance()

    assert upstream.advances == 1
    assert upstream.disposals == 1


async def test_cancellation_is_not_reported_as_exhaustion():
    token = s.CancellationToken()
    token.cancel()

    with pytest.raises(s.OperationCancelled):
        await s.to_list(range(3) | s.Filter(bool), token=token)

    with pytest.raises(s.OperationCancelled):
        await s.any_([1], token=token)


async def test_cancellation_during_iteration():
    token = s.CancellationToken()
    seen = []

    with pytest.raises(s.OperationCancelled):
        async for item in (range(100) | s.Map(lambda x: x)).iterate(token):
            seen.append(item)
            if item == 2:
                token.cancel()

    assert seen == [0, 1, 2]


async def test_cancellation_aborts_running_async_selector():
    token = s.CancellationToken()
    started = asyncio.Event()
    aborted = []

    async def slow(x, t):
        started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            aborted.append(x)
            raise
        return x

    async def cancel_when_started():
        await started.wait()
        token.cancel()

    canceller = asyncio.create_task(cancel_when_started())
    with pytest.raises(s.OperationCancelled):
        await s.to_list([1, 2] | s.MapAsync(slow), token=token)
    await canceller

    assert aborted == [1]


async def test_async_selector_can_observe_token():
    token = s.CancellationToken()

    async def selector(x, t):
        if x == 2:
            t.cancel()
        return x

    with pytest.raises(s.OperationCancelled):
        await s.to_list(range(5) | s.MapAsync(selector), token=token)


async def test_for_each_async_is_cancellable():
    token = s.CancellationToken()
    handled = []

    async def action(x, t):
        handled.append(x)
        if x == 1:
            t.cancel()

    with pytest.raises(s.OperationCancelled):
        await s.for_each_async(range(5), action, token=token)

    assert handled == [0, 1]


async def test_cancellable_returns_result_when_not_cancelled():
    token = s.CancellationToken()

    async def work():
        await asyncio.sleep(0)
        return 42

    assert await s.cancellable(work(), token) == 42


def test_none_token_cannot_be_cancelled():
    token = s.CancellationToken.none()
    assert not token.can_be_cancelled
    with pytest.raises(RuntimeError):
        token.cancel()
    assert not token.cancellation_requested
