from asyncseq.base import AsyncSequence, Step, T
from asyncseq.cancellation import CancellationToken
from asyncseq.cursor import Cursor, UpstreamCursor
from asyncseq._helpers import require_count


class _TakeCursor(UpstreamCursor[T, T]):
    """Take cursor that stops pulling from upstream once it has enough items."""

    def __init__(self, upstream: Cursor[T], n: int):
        super().__init__(upstream)
        self.n = n
        self.taken = 0

    async def _move_next(self) -> bool:
        # Never pull an (n+1)th element, and never advance at all for n == 0
        if self.taken >= self.n:
            return False

        if not await self.upstream.advance():
            return False

        self.taken += 1
        self._current = self.upstream.current
        return True


class _TakeSequence(AsyncSequence[T]):
    def __init__(self, source: AsyncSequence[T], n: int):
        self.source = source
        self.n = n

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        return _TakeCursor(self.source.cursor(token), self.n)


class Take(Step[T, T]):
    """Take step yielding at most the first N elements."""

    def __init__(self, n: int):
        self.n = require_count(n, "n", "Take")

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _TakeSequence(source, self.n)


def take(n: int) -> Take[T]:
    """Take step."""
    return Take(n)
