import inspect
from typing import Any, AsyncIterable, Awaitable, Callable, Iterable, Optional, Union

from asyncseq.base import AsyncSequence, Step, T, U
from asyncseq.cancellation import CancellationToken, cancellable
from asyncseq.cursor import Cursor, UpstreamCursor, dispose_all
from asyncseq.sources import as_sequence
from asyncseq._helpers import require_callable

Inner = Union[AsyncSequence[U], AsyncIterable[U], Iterable[U]]


class _FlatMapCursor(UpstreamCursor[T, U]):
    """Cursor that projects each element to an inner sequence and flattens.

    At most one inner cursor is alive at a time. It is acquired when its
    outer element is reached and disposed as soon as it is exhausted, so all
    of element 1's projected items come before any of element 2's.
    """

    def __init__(
        self,
        upstream: Cursor[T],
        func: Callable[[T], Union[Inner[U], Awaitable[Inner[U]]]],
    ):
        """Initialize the flat_map cursor.

        Args:
            upstream: Cursor to read outer elements from
            func: Function that takes an element and returns its inner items
        """
        super().__init__(upstream)
        self.func = func
        self.inner: Optional[Cursor[U]] = None

    async def _move_next(self) -> bool:
        while True:
            if self.inner is not None:
                if await self.inner.advance():
                    self._current = self.inner.current
                    return True
                inner, self.inner = self.inner, None
                await inner.dispose()

            if not await self.upstream.advance():
                return False

            results: Any = self.func(self.upstream.current)
            if inspect.isawaitable(results):
                results = await cancellable(results, self.token, "FlatMap")

            self.inner = as_sequence(results, "FlatMap", "selector result").cursor(
                self.token
            )

    async def _cleanup(self):
        inner, self.inner = self.inner, None
        await dispose_all(self.upstream, inner)


class _FlatMapSequence(AsyncSequence[U]):
    def __init__(self, source: AsyncSequence[T], func: Callable[[T], Any]):
        self.source = source
        self.func = func

    def _create_cursor(self, token: CancellationToken) -> Cursor[U]:
        return _FlatMapCursor(self.source.cursor(token), self.func)


class FlatMap(Step[T, U]):
    """Step that projects each element to several items and flattens them.

    The selector may return a plain iterable, an AsyncSequence, an async
    iterable such as an async generator, or an awaitable resolving to any of
    these. Inner items are produced lazily and in order.

    Example:
        >>> # Split strings into words
        >>> sentences = ["hello world", "python rocks"]
        >>> await (sentences | FlatMap(str.split)).collect()
        ['hello', 'world', 'python', 'rocks']

        >>> # Generate number ranges
        >>> await ([3, 2, 4] | FlatMap(range)).collect()
        [0, 1, 2, 0, 1, 0, 1, 2, 3]

    Note:
        Empty inner iterables are valid and contribute no items.
    """

    def __init__(self, func: Callable[[T], Union[Inner[U], Awaitable[Inner[U]]]]):
        """Initialize the FlatMap step.

        Args:
            func: Function that takes an element and returns its inner items

        Raises:
            InvalidArgument: If func is None or not callable
        """
        require_callable(func, "selector", "FlatMap")
        self.func = func

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[U]:
        return _FlatMapSequence(source, self.func)


def flat_map(
    func: Callable[[T], Union[Inner[U], Awaitable[Inner[U]]]],
) -> FlatMap[T, U]:
    """Create a flat_map step that applies a function and flattens the results.

    Args:
        func: Function that takes an element and returns an iterable, a
              sequence or an async iterable. Can be synchronous or asynchronous.

    Returns:
        A FlatMap step that can be applied to sequences

    Examples:
        >>> # Data extraction: flatten nested structures
        >>> nested_data = [[1, 2, 3], [4, 5], [6, 7, 8, 9]]
        >>> await (nested_data | flat_map(lambda x: x)).collect()
        [1, 2, 3, 4, 5, 6, 7, 8, 9]

        >>> # Inner async generators
        >>> async def pages(book):
        ...     for page in await load_pages(book):
        ...         yield page
        >>> all_pages = await (books | flat_map(pages)).collect()
    """
    return FlatMap(func)
