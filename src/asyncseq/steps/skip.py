from asyncseq.base import AsyncSequence, Step, T
from asyncseq.cancellation import CancellationToken
from asyncseq.cursor import Cursor, UpstreamCursor
from asyncseq._helpers import require_count


class _SkipCursor(UpstreamCursor[T, T]):
    """Cursor that discards the first N upstream elements.

    The skipped elements are pulled on the first advance, stopping early if
    the upstream runs out; every later advance delegates to the upstream.
    """

    def __init__(self, upstream: Cursor[T], n: int):
        """Initialize the skip cursor.

        Args:
            upstream: Cursor to read elements from
            n: Number of elements to skip
        """
        super().__init__(upstream)
        self.remaining = n

    async def _move_next(self) -> bool:
        while self.remaining > 0:
            self.remaining -= 1
            if not await self.upstream.advance():
                self.remaining = 0
                return False

        if await self.upstream.advance():
            self._current = self.upstream.current
            return True
        return False


class _SkipSequence(AsyncSequence[T]):
    def __init__(self, source: AsyncSequence[T], n: int):
        self.source = source
        self.n = n

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        if self.n == 0:
            return self.source.cursor(token)
        return _SkipCursor(self.source.cursor(token), self.n)


class Skip(Step[T, T]):
    """Step that skips the first N elements of a sequence.

    The Skip step ignores the first N elements and passes every remaining
    element through in order. ``Skip(0)`` yields the source unchanged and
    skipping at least as many elements as the source holds yields nothing.

    Example:
        >>> # Skip first 3 numbers
        >>> await (range(10) | Skip(3)).collect()
        [3, 4, 5, 6, 7, 8, 9]

        >>> # Skip and take combination (pagination)
        >>> page_2 = await (range(100) | Skip(10) | Take(10)).collect()
        >>> # [10, 11, 12, 13, 14, 15, 16, 17, 18, 19]
    """

    def __init__(self, n: int):
        """Initialize the Skip step.

        Args:
            n: Number of elements to skip

        Raises:
            InvalidArgument: If n is negative or not an integer
        """
        self.n = require_count(n, "n", "Skip")

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _SkipSequence(source, self.n)


def skip(n: int) -> Skip[T]:
    """Create a skip step that ignores the first N elements of a sequence.

    Args:
        n: Number of elements to skip from the beginning. Must be non-negative.

    Returns:
        A Skip step that can be applied to sequences

    Raises:
        InvalidArgument: If n is negative

    Examples:
        >>> # Skip header in data processing
        >>> lines = ["# Header", "data1", "data2", "data3"]
        >>> await (lines | skip(1)).collect()
        ['data1', 'data2', 'data3']

        >>> # Pagination
        >>> page_n = lambda page, size: skip(page * size) | take(size)
    """
    return Skip(n)
