from typing import Awaitable, Callable

from ..base import AsyncSequence, Step, T
from ..cancellation import CancellationToken
from ..cursor import Cursor, UpstreamCursor
from .._helpers import maybe_await, require_callable


class _FilterCursor(UpstreamCursor[T, T]):
    """Cursor that skips upstream elements rejected by a predicate.

    The predicate is invoked exactly once per upstream element, in upstream
    order, including for the elements it rejects.
    """

    def __init__(
        self,
        upstream: Cursor[T],
        predicate: Callable[[T], Awaitable[bool] | bool],
    ):
        super().__init__(upstream)
        self.predicate = predicate

    async def _move_next(self) -> bool:
        while await self.upstream.advance():
            item = self.upstream.current
            if await maybe_await(self.predicate(item)):
                self._current = item
                return True
        return False


class _FilterSequence(AsyncSequence[T]):
    def __init__(
        self,
        source: AsyncSequence[T],
        predicate: Callable[[T], Awaitable[bool] | bool],
    ):
        self.source = source
        self.predicate = predicate

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        return _FilterCursor(self.source.cursor(token), self.predicate)


class Filter(Step[T, T]):
    """Step that keeps only the elements satisfying a predicate.

    The predicate can be synchronous or asynchronous and should return True
    for elements to keep. Surviving elements keep their upstream order.

    Example:
        >>> # Keep only even numbers
        >>> await (range(10) | Filter(lambda x: x % 2 == 0)).collect()
        [0, 2, 4, 6, 8]

        >>> # Filter strings by length
        >>> words = ["hi", "hello", "world", "a", "python"]
        >>> await (words | Filter(lambda s: len(s) > 2)).collect()
        ['hello', 'world', 'python']
    """

    def __init__(self, predicate: Callable[[T], Awaitable[bool] | bool]):
        """Initialize the Filter step.

        Args:
            predicate: Function that returns True for elements to keep

        Raises:
            InvalidArgument: If predicate is None or not callable
        """
        require_callable(predicate, "predicate", "Filter")
        self.predicate = predicate

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _FilterSequence(source, self.predicate)


def filter(predicate: Callable[[T], Awaitable[bool] | bool]) -> Filter[T]:
    """Create a filter step that keeps elements matching a predicate.

    Args:
        predicate: Function that returns True for elements to keep, False to
                  drop. Can be async or sync.

    Returns:
        A Filter step that can be applied to sequences

    Examples:
        >>> evens = filter(lambda x: x % 2 == 0)
        >>> await (range(6) | evens).collect()
        [0, 2, 4]

        >>> # Async predicate
        >>> async def is_valid_email(email):
        ...     await asyncio.sleep(0.01)
        ...     return '@' in email and '.' in email
        >>>
        >>> emails = ["test@example.com", "invalid", "user@domain.org"]
        >>> await (emails | filter(is_valid_email)).collect()
        ['test@example.com', 'user@domain.org']
    """
    return Filter(predicate)
