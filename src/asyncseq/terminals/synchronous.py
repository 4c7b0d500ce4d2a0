"""Bridge from asynchronous sequences back to plain synchronous iteration."""

import asyncio
import logging
from typing import Iterator, Optional, TypeVar

from asyncseq.base import AsyncSequence
from asyncseq.cancellation import CancellationToken
from asyncseq.errors import CursorStateError
from asyncseq.sources import as_sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_synchronous(
    source: AsyncSequence[T], *, token: Optional[CancellationToken] = None
) -> Iterator[T]:
    """Adapt an asynchronous sequence to a blocking iterator.

    Each ``next()`` drives one advance to completion on a private event loop,
    blocking the calling thread meanwhile. The cursor is disposed and the
    loop closed when iteration finishes, fails or the iterator is closed.

    Because it runs its own loop, the iterator must be consumed from a
    thread without a running event loop.

    Args:
        source: The sequence to iterate
        token: Optional cancellation token

    Returns:
        A generator yielding the sequence's elements

    Raises:
        InvalidArgument: If source is None

    Example:
        >>> list(to_synchronous(from_iterable([5, 6, 7, 8, 9])))
        [5, 6, 7, 8, 9]
    """
    sequence = as_sequence(source, "to_synchronous")
    return _iterate_blocking(sequence, token)


def _iterate_blocking(
    sequence: AsyncSequence[T], token: Optional[CancellationToken]
) -> Iterator[T]:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise CursorStateError(
            "cannot block on a sequence inside a running event loop",
            "to_synchronous",
        )

    loop = asyncio.new_event_loop()
    logger.debug("Started private event loop for synchronous iteration")
    cursor = sequence.cursor(token)
    try:
        while loop.run_until_complete(cursor.advance()):
            yield cursor.current
    finally:
        try:
            loop.run_until_complete(cursor.dispose())
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            loop.close()
            logger.debug("Closed private event loop for synchronous iteration")
