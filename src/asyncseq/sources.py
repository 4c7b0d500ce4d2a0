"""Source sequences: adapters from plain and async iterables."""

from typing import Any, AsyncIterable, AsyncIterator, Iterable, Iterator, Optional, TypeVar, Union

from asyncseq.base import AsyncSequence
from asyncseq.cancellation import CancellationToken
from asyncseq.cursor import Cursor
from asyncseq.errors import InvalidArgument
from asyncseq._helpers import require

T = TypeVar("T")


class _IterableCursor(Cursor[T]):
    """Cursor over a plain iterable; the iterator is created on first advance."""

    def __init__(self, iterable: Iterable[T], token: CancellationToken):
        super().__init__(token)
        self.iterable = iterable
        self.iterator: Optional[Iterator[T]] = None

    async def _move_next(self) -> bool:
        if self.iterator is None:
            self.iterator = iter(self.iterable)
        try:
            self._current = next(self.iterator)
        except StopIteration:
            return False
        return True

    async def _cleanup(self):
        close = getattr(self.iterator, "close", None)
        if close is not None:
            close()
        self.iterator = None


class IterableSequence(AsyncSequence[T]):
    """Sequence wrapping a plain (synchronous) iterable.

    Each cursor calls ``iter()`` on the iterable again, so lists, tuples and
    ranges can be iterated any number of times. One-shot iterators such as
    generators are exhausted after the first full pass.
    """

    def __init__(self, iterable: Iterable[T]):
        self.iterable = iterable

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        return _IterableCursor(self.iterable, token)


class _AsyncIterableCursor(Cursor[T]):
    """Cursor over an async iterable such as an async generator."""

    def __init__(self, iterable: AsyncIterable[T], token: CancellationToken):
        super().__init__(token)
        self.iterable = iterable
        self.iterator: Optional[AsyncIterator[T]] = None

    async def _move_next(self) -> bool:
        if self.iterator is None:
            self.iterator = self.iterable.__aiter__()
        try:
            self._current = await self.iterator.__anext__()
        except StopAsyncIteration:
            return False
        return True

    async def _cleanup(self):
        aclose = getattr(self.iterator, "aclose", None)
        self.iterator = None
        if aclose is not None:
            await aclose()


class AsyncIterableSequence(AsyncSequence[T]):
    """Sequence wrapping any object implementing ``__aiter__``."""

    def __init__(self, iterable: AsyncIterable[T]):
        self.iterable = iterable

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        return _AsyncIterableCursor(self.iterable, token)


class _EmptyCursor(Cursor[Any]):
    async def _move_next(self) -> bool:
        return False


class EmptySequence(AsyncSequence[Any]):
    """A sequence with no elements."""

    def _create_cursor(self, token: CancellationToken) -> Cursor[Any]:
        return _EmptyCursor(token)


def from_iterable(iterable: Iterable[T]) -> AsyncSequence[T]:
    """Wrap a plain iterable as an asynchronous sequence.

    Args:
        iterable: Any iterable; it is not consumed until a cursor advances.

    Returns:
        An AsyncSequence yielding the iterable's elements in order

    Raises:
        InvalidArgument: If the iterable is None

    Examples:
        >>> await from_iterable([5, 6, 7]).collect()
        [5, 6, 7]
    """
    require(iterable, "iterable", "from_iterable")
    return IterableSequence(iterable)


def from_async_iterable(iterable: AsyncIterable[T]) -> AsyncSequence[T]:
    """Wrap an async iterable (for example an async generator) as a sequence."""
    require(iterable, "iterable", "from_async_iterable")
    if not hasattr(iterable, "__aiter__"):
        raise InvalidArgument(
            "iterable",
            f"must be an async iterable, got {type(iterable).__name__}",
            "from_async_iterable",
        )
    return AsyncIterableSequence(iterable)


def empty() -> AsyncSequence[Any]:
    """Return a sequence that contains no elements."""
    return EmptySequence()


def as_sequence(
    data: Union[AsyncSequence[T], Iterable[T], AsyncIterable[T], None],
    operation: str,
    name: str = "source",
) -> AsyncSequence[T]:
    """Coerce supported inputs into an AsyncSequence.

    Sequences are returned unchanged, async iterables are wrapped with
    from_async_iterable and plain iterables with from_iterable.

    Args:
        data: The input to coerce
        operation: Name of the public operation, used in error messages
        name: Name of the argument being coerced

    Raises:
        InvalidArgument: If data is None or not iterable
    """
    require(data, name, operation)

    if isinstance(data, AsyncSequence):
        return data
    elif hasattr(data, "__aiter__"):
        return AsyncIterableSequence(data)
    elif hasattr(data, "__iter__"):
        return IterableSequence(data)

    raise InvalidArgument(
        name, f"must be a sequence or iterable, got {type(data).__name__}", operation
    )
