"""Cursor protocol shared by every sequence in asyncseq."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from asyncseq.cancellation import CancellationToken
from asyncseq.errors import CursorStateError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Cursor(ABC, Generic[T]):
    """Stateful position within an asynchronous sequence.

    A cursor is obtained from ``AsyncSequence.cursor()`` and driven with
    ``advance()``, which suspends until the next element is known and returns
    True when one is available. The element is then exposed through
    ``current`` until the next call to ``advance()`` or ``dispose()``.

    Cursors own the upstream cursors they wrap and release them in
    ``dispose()``. Disposal is idempotent and safe on a cursor that was never
    advanced. The preferred way to guarantee it on every exit path is the
    async context manager form:

        >>> async with sequence.cursor() as cursor:
        ...     while await cursor.advance():
        ...         print(cursor.current)

    A cursor is not safe for use by more than one concurrent caller.

    Subclasses implement ``_move_next`` (store the element in ``_current``
    and return True, or return False when exhausted) and optionally
    ``_cleanup`` to release resources.
    """

    def __init__(self, token: Optional[CancellationToken] = None):
        """Initialize the cursor.

        Args:
            token: Cancellation token observed on every advance.
        """
        self.token = token if token is not None else CancellationToken.none()
        self._current: Any = None
        self._has_current = False
        self._exhausted = False
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def advance(self) -> bool:
        """Move to the next element.

        Returns:
            True if an element is available through ``current``; False once
            the sequence is exhausted.

        Raises:
            OperationCancelled: If the cursor's token has been cancelled.
            CursorStateError: If the cursor has already been disposed.
        """
        if self._disposed:
            raise CursorStateError(
                "cannot advance a disposed cursor", type(self).__name__
            )

        self._has_current = False
        self._current = None

        if self._exhausted:
            return False

        self.token.raise_if_cancellation_requested(type(self).__name__)

        if await self._move_next():
            self._has_current = True
            return True

        self._exhausted = True
        return False

    @property
    def current(self) -> T:
        """The element at the cursor's position.

        Raises:
            CursorStateError: If the last advance did not succeed.
        """
        if not self._has_current:
            raise CursorStateError(
                "current is only valid after a successful advance",
                type(self).__name__,
            )
        return self._current_value()

    def _current_value(self) -> T:
        return self._current

    async def dispose(self):
        """Release this cursor and every upstream cursor it owns."""
        if self._disposed:
            return
        self._disposed = True
        self._has_current = False
        self._current = None
        await self._cleanup()

    @abstractmethod
    async def _move_next(self) -> bool:
        """Produce the next element into ``_current``.

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    async def _cleanup(self):
        """Release resources held by this cursor.

        Subclasses can override this method to dispose upstream cursors or
        clear accumulated state.
        """
        pass

    async def __aenter__(self) -> "Cursor[T]":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.dispose()

    def __aiter__(self) -> "Cursor[T]":
        return self

    async def __anext__(self) -> T:
        if await self.advance():
            return self.current
        raise StopAsyncIteration


class UpstreamCursor(Cursor[U], Generic[T, U]):
    """Cursor that wraps exactly one upstream cursor.

    The upstream cursor is acquired by the owning sequence when this cursor
    is created and shares its cancellation token.
    """

    def __init__(self, upstream: Cursor[T], token: Optional[CancellationToken] = None):
        super().__init__(token if token is not None else upstream.token)
        self.upstream = upstream

    async def _cleanup(self):
        await self.upstream.dispose()


async def dispose_all(*cursors: Optional[Cursor[Any]]):
    """Dispose several cursors in reverse order, even if one of them fails.

    The first disposal error is re-raised once every cursor has been given
    the chance to release its resources.
    """
    error: Optional[BaseException] = None
    for cursor in reversed(cursors):
        if cursor is None:
            continue
        try:
            await cursor.dispose()
        except Exception as e:
            logger.debug("Disposing %s failed: %r", type(cursor).__name__, e)
            if error is None:
                error = e
    if error is not None:
        raise error
