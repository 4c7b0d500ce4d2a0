"""Steps that chain sequences end to end: Concat, Append and Prepend."""

from typing import AsyncIterable, Iterable, List, Optional, Union

from asyncseq.base import AsyncSequence, Step, T
from asyncseq.cancellation import CancellationToken
from asyncseq.cursor import Cursor
from asyncseq.sources import IterableSequence, as_sequence

Items = Union[AsyncSequence[T], Iterable[T], AsyncIterable[T]]


class _ChainCursor(Cursor[T]):
    """Cursor that drives each part to exhaustion before starting the next.

    Part cursors are acquired only when the previous part is exhausted, so a
    prepended part never forces an element of the parts behind it. An
    exhausted part's cursor is disposed before the next one is acquired; the
    active one is disposed with this cursor.
    """

    def __init__(self, parts: List[AsyncSequence[T]], token: CancellationToken):
        super().__init__(token)
        self.parts = parts
        self.position = 0
        self.active: Optional[Cursor[T]] = None

    async def _move_next(self) -> bool:
        while self.position < len(self.parts):
            if self.active is None:
                self.active = self.parts[self.position].cursor(self.token)

            if await self.active.advance():
                self._current = self.active.current
                return True

            finished, self.active = self.active, None
            self.position += 1
            await finished.dispose()
        return False

    async def _cleanup(self):
        active, self.active = self.active, None
        if active is not None:
            await active.dispose()


class _ChainSequence(AsyncSequence[T]):
    def __init__(self, parts: List[AsyncSequence[T]]):
        self.parts = parts

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        return _ChainCursor(self.parts, token)


class Concat(Step[T, T]):
    """Step that yields every element of the source, then every element of another.

    Example:
        >>> await ([1, 2] | Concat([3, 4])).collect()
        [1, 2, 3, 4]
    """

    def __init__(self, other: Items[T]):
        """Initialize the Concat step.

        Args:
            other: Sequence or iterable whose elements follow the source's

        Raises:
            InvalidArgument: If other is None or not iterable
        """
        self.other = as_sequence(other, "Concat", "other")

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _ChainSequence([source, self.other])


class Append(Step[T, T]):
    """Step that yields a single extra element after the source's elements."""

    def __init__(self, element: T):
        self.element = element

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _ChainSequence([source, IterableSequence((self.element,))])


class AppendAll(Step[T, T]):
    """Step that yields extra elements, from an iterable or sequence, after the source."""

    def __init__(self, items: Items[T]):
        self.items = as_sequence(items, "AppendAll", "items")

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _ChainSequence([source, self.items])


class Prepend(Step[T, T]):
    """Step that yields a single extra element before the source's elements.

    The source is not touched until the consumer advances past the
    prepended element.
    """

    def __init__(self, element: T):
        self.element = element

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _ChainSequence([IterableSequence((self.element,)), source])


class PrependAll(Step[T, T]):
    """Step that yields extra elements before the source's elements.

    Example:
        >>> await ([3, 4] | PrependAll([1, 2])).collect()
        [1, 2, 3, 4]
    """

    def __init__(self, items: Items[T]):
        self.items = as_sequence(items, "PrependAll", "items")

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _ChainSequence([self.items, source])


def concat(other: Items[T]) -> Concat[T]:
    """Create a step that appends another sequence to the source."""
    return Concat(other)


def append(element: T) -> Append[T]:
    return Append(element)


def append_all(items: Items[T]) -> AppendAll[T]:
    return AppendAll(items)


def prepend(element: T) -> Prepend[T]:
    return Prepend(element)


def prepend_all(items: Items[T]) -> PrependAll[T]:
    return PrependAll(items)
