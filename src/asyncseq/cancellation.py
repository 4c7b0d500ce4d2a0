"""Cancellation primitives threaded through every cursor and callback."""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from asyncseq.errors import OperationCancelled

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationToken:
    """A cooperative cancellation signal backed by an asyncio.Event.

    Cursors check the token at the start of every advance, and async
    callbacks receive it so they can abort mid-computation. Cancelling a
    token is permanent.

    Example:
        >>> token = CancellationToken()
        >>> cursor = sequence.cursor(token)
        >>> token.cancel()
        >>> await cursor.advance()  # raises OperationCancelled
    """

    def __init__(self, *, can_be_cancelled: bool = True):
        """Initialize a token.

        Args:
            can_be_cancelled: False for the shared "none" token, which
                rejects cancel() and lets callbacks skip the cancellation race.

        """
        self._event = asyncio.Event()
        self._can_be_cancelled = can_be_cancelled

    @classmethod
    def none(cls) -> "CancellationToken":
        """Return a token that is never cancelled."""
        return cls(can_be_cancelled=False)

    @property
    def can_be_cancelled(self) -> bool:
        return self._can_be_cancelled

    @property
    def cancellation_requested(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        """Request cancellation of every operation observing this token."""
        if not self._can_be_cancelled:
            raise RuntimeError("this token cannot be cancelled")
        self._event.set()

    def raise_if_cancellation_requested(self, operation: Optional[str] = None):
        """Raise OperationCancelled if cancellation has been requested."""
        if self._event.is_set():
            logger.debug("Cancellation observed in %s", operation or "operation")
            raise OperationCancelled(operation=operation)

    async def wait(self):
        """Wait until cancellation is requested."""
        await self._event.wait()

    def __repr__(self):
        state = "cancelled" if self.cancellation_requested else "active"
        return f"CancellationToken({state})"


async def cancellable(
    awaitable: Awaitable[T],
    token: CancellationToken,
    operation: Optional[str] = None,
) -> T:
    """Await a callback result, aborting it if the token is cancelled first.

    The awaitable runs in its own task and races a watcher on the token.
    Whichever finishes first wins; the loser is cancelled and awaited so no
    task outlives the call.

    Args:
        awaitable: The awaitable returned by an async callback.
        token: Token that may abort the callback.
        operation: Name used in the OperationCancelled message.

    Returns:
        The callback's result.

    Raises:
        OperationCancelled: If the token fired before the callback finished.

    """
    if not token.can_be_cancelled:
        return await awaitable

    work = asyncio.ensure_future(awaitable)
    if token.cancellation_requested:
        await _cancel_and_wait(work)
        raise OperationCancelled(operation=operation)

    watcher = asyncio.create_task(token.wait())
    try:
        await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        # Also covers the caller itself being cancelled while waiting
        await _cancel_and_wait(watcher)
        if not work.done():
            await _cancel_and_wait(work)
            logger.debug("Callback aborted by cancellation in %s", operation)

    if work.cancelled() and token.cancellation_requested:
        raise OperationCancelled(operation=operation)
    return work.result()


async def _cancel_and_wait(task: asyncio.Future):
    """Cancel a task and wait for it to settle."""
    if task.done():
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
