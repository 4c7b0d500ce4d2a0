from typing import Awaitable, Callable

from ..base import AsyncSequence, Step, T, U
from ..cancellation import CancellationToken, cancellable
from ..cursor import Cursor, UpstreamCursor
from .._helpers import require_callable


class _MapCursor(UpstreamCursor[T, U]):
    """Map cursor.

    The selector is not memoized: it runs on every read of ``current``.
    """

    def __init__(self, upstream: Cursor[T], func: Callable[[T], U]):
        super().__init__(upstream)
        self.func = func

    async def _move_next(self) -> bool:
        return await self.upstream.advance()

    def _current_value(self) -> U:
        return self.func(self.upstream.current)


class _MapAsyncCursor(UpstreamCursor[T, U]):
    """Map cursor that awaits the selector once per element and buffers it."""

    def __init__(
        self,
        upstream: Cursor[T],
        func: Callable[[T, CancellationToken], Awaitable[U]],
    ):
        super().__init__(upstream)
        self.func = func

    async def _move_next(self) -> bool:
        if not await self.upstream.advance():
            return False
        self._current = await cancellable(
            self.func(self.upstream.current, self.token), self.token, "MapAsync"
        )
        return True


class _MapSequence(AsyncSequence[U]):
    def __init__(self, source: AsyncSequence[T], func: Callable, is_async: bool):
        self.source = source
        self.func = func
        self.is_async = is_async

    def _create_cursor(self, token: CancellationToken) -> Cursor[U]:
        upstream = self.source.cursor(token)
        if self.is_async:
            return _MapAsyncCursor(upstream, self.func)
        return _MapCursor(upstream, self.func)


class Map(Step[T, U]):
    """Map operation to transform each element with a synchronous selector.

    The selector is applied lazily each time ``current`` is read, so reading
    ``current`` twice runs it twice. Use MapAsync for selectors that should
    run exactly once per element.
    """

    def __init__(self, func: Callable[[T], U]):
        require_callable(func, "selector", "Map")
        self.func = func

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[U]:
        return _MapSequence(source, self.func, is_async=False)


class MapAsync(Step[T, U]):
    """Map operation with an asynchronous selector.

    The selector receives ``(item, token)`` and its result is awaited during
    advance, then buffered. If the token is cancelled while the selector is
    running, the selector is aborted and OperationCancelled is raised.

    Example:
        >>> async def fetch(x, token):
        ...     await asyncio.sleep(0.01)
        ...     return x * 10
        >>> await ([1, 2, 3] | MapAsync(fetch)).collect()
        [10, 20, 30]
    """

    def __init__(self, func: Callable[[T, CancellationToken], Awaitable[U]]):
        require_callable(func, "selector", "MapAsync")
        self.func = func

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[U]:
        return _MapSequence(source, self.func, is_async=True)


def map(func: Callable[[T], U]) -> Map[T, U]:
    """Map operation to transform each element in a sequence."""
    return Map(func)


def map_async(func: Callable[[T, CancellationToken], Awaitable[U]]) -> MapAsync[T, U]:
    """Map operation with an async selector receiving a cancellation token."""
    return MapAsync(func)
