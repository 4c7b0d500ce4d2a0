from typing import Any, AsyncIterable, Awaitable, Callable, Iterable, Union

from asyncseq.base import AsyncSequence, Step, T, U, V
from asyncseq.cancellation import CancellationToken, cancellable
from asyncseq.cursor import Cursor, dispose_all
from asyncseq.sources import as_sequence
from asyncseq._helpers import require_callable


class _ZipCursor(Cursor[V]):
    """Cursor combining corresponding elements of two upstream cursors.

    Both upstream cursors are acquired together when this cursor is created
    and disposed together, in reverse order, when it is disposed. Each
    advance moves the first cursor, then the second only if the first
    produced an element, so the result is as long as the shorter source.
    """

    def __init__(
        self,
        first: Cursor[T],
        second: Cursor[U],
        func: Callable[..., Any],
        is_async: bool,
        token: CancellationToken,
    ):
        super().__init__(token)
        self.first = first
        self.second = second
        self.func = func
        self.is_async = is_async

    async def _move_next(self) -> bool:
        if not await self.first.advance():
            return False
        if not await self.second.advance():
            return False

        if self.is_async:
            self._current = await cancellable(
                self.func(self.first.current, self.second.current, self.token),
                self.token,
                "ZipAsync",
            )
        else:
            self._current = self.func(self.first.current, self.second.current)
        return True

    async def _cleanup(self):
        await dispose_all(self.first, self.second)


class _ZipSequence(AsyncSequence[V]):
    def __init__(
        self,
        source: AsyncSequence[T],
        other: AsyncSequence[U],
        func: Callable[..., Any],
        is_async: bool,
    ):
        self.source = source
        self.other = other
        self.func = func
        self.is_async = is_async

    def _create_cursor(self, token: CancellationToken) -> Cursor[V]:
        return _ZipCursor(
            self.source.cursor(token),
            self.other.cursor(token),
            self.func,
            self.is_async,
            token,
        )


def _default_pair(a: T, b: U) -> tuple:
    return (a, b)


class Zip(Step[T, V]):
    """Step pairing each element with the corresponding element of another sequence.

    The combiner defaults to building ``(a, b)`` tuples. The result stops as
    soon as either source is exhausted.

    Example:
        >>> await ([1, 2, 3] | Zip(["a", "b"])).collect()
        [(1, 'a'), (2, 'b')]
        >>> await ([1, 2] | Zip([10, 20], lambda a, b: a + b)).collect()
        [11, 22]
    """

    def __init__(
        self,
        other: Union[AsyncSequence[U], Iterable[U], AsyncIterable[U]],
        func: Callable[[T, U], V] = _default_pair,
    ):
        self.other = as_sequence(other, "Zip", "other")
        require_callable(func, "selector", "Zip")
        self.func = func

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[V]:
        return _ZipSequence(source, self.other, self.func, is_async=False)


class ZipAsync(Step[T, V]):
    """Zip step with an async combiner receiving ``(a, b, token)``.

    The combiner is awaited before the advance reports success, so a fault
    raised by the combiner surfaces as the advance's fault.
    """

    def __init__(
        self,
        other: Union[AsyncSequence[U], Iterable[U], AsyncIterable[U]],
        func: Callable[[T, U, CancellationToken], Awaitable[V]],
    ):
        self.other = as_sequence(other, "ZipAsync", "other")
        require_callable(func, "selector", "ZipAsync")
        self.func = func

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[V]:
        return _ZipSequence(source, self.other, self.func, is_async=True)


def zip(
    other: Union[AsyncSequence[U], Iterable[U], AsyncIterable[U]],
    func: Callable[[T, U], V] = _default_pair,
) -> Zip[T, V]:
    """Create a zip step combining the source with another sequence."""
    return Zip(other, func)


def zip_async(
    other: Union[AsyncSequence[U], Iterable[U], AsyncIterable[U]],
    func: Callable[[T, U, CancellationToken], Awaitable[V]],
) -> ZipAsync[T, V]:
    return ZipAsync(other, func)
