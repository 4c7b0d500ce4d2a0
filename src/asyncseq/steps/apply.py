from typing import Any, Callable

from asyncseq.base import AsyncSequence, Step, T
from asyncseq.cancellation import CancellationToken
from asyncseq.cursor import Cursor, UpstreamCursor
from asyncseq._helpers import maybe_await, require_callable


class _ApplyCursor(UpstreamCursor[T, T]):
    """Cursor that runs a side effect on each element as it passes through."""

    def __init__(self, upstream: Cursor[T], action: Callable[[T], Any]):
        super().__init__(upstream)
        self.action = action

    async def _move_next(self) -> bool:
        if not await self.upstream.advance():
            return False
        item = self.upstream.current
        await maybe_await(self.action(item))
        self._current = item
        return True


class _ApplySequence(AsyncSequence[T]):
    def __init__(self, source: AsyncSequence[T], action: Callable[[T], Any]):
        self.source = source
        self.action = action

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        return _ApplyCursor(self.source.cursor(token), self.action)


class Apply(Step[T, T]):
    """Step that invokes an action on every element without changing it.

    The action runs once per element, in order, when the element is reached
    by an advance, which makes it useful for logging or progress reporting in
    the middle of a pipeline. Use ``terminals.for_each`` to run an action over
    a whole sequence eagerly.

    Example:
        >>> seen = []
        >>> await ([1, 2, 3] | Apply(seen.append) | Take(2)).collect()
        [1, 2]
        >>> seen
        [1, 2]
    """

    def __init__(self, action: Callable[[T], Any]):
        require_callable(action, "action", "Apply")
        self.action = action

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _ApplySequence(source, self.action)


def apply(action: Callable[[T], Any]) -> Apply[T]:
    """Create a step running a side effect for each element."""
    return Apply(action)
