"""Aggregate operations that reduce a sequence to a single value.

Like every terminal, these are plain functions that validate their
arguments and return a coroutine, so ``count(None)`` raises InvalidArgument
immediately rather than on first await.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

from asyncseq.base import AsyncSequence
from asyncseq.cancellation import CancellationToken, cancellable
from asyncseq.comparers import EqualityComparer
from asyncseq.errors import EmptySequenceError
from asyncseq.sources import as_sequence
from asyncseq._helpers import (
    NOT_PROVIDED,
    _NotProvided,
    maybe_await,
    require_callable,
    resolve_comparer,
)

T = TypeVar("T")
U = TypeVar("U")


async def _all(sequence, predicate, token):
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            if not await maybe_await(predicate(cursor.current)):
                return False
    return True


async def _any(sequence, predicate, token):
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            if predicate is None or await maybe_await(predicate(cursor.current)):
                return True
    return False


async def _count(sequence, predicate, token):
    total = 0
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            if predicate is None or await maybe_await(predicate(cursor.current)):
                total += 1
    return total


async def _contains(sequence, item, comparer, token):
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            if comparer.equals(item, cursor.current):
                return True
    return False


async def _sequence_equals(sequence, other, comparer, token):
    async with sequence.cursor(token) as first, other.cursor(token) as second:
        while True:
            has_first = await first.advance()
            has_second = await second.advance()
            if has_first != has_second:
                return False
            if not has_first:
                return True
            if not comparer.equals(first.current, second.current):
                return False


def all_(
    source: AsyncSequence[T],
    predicate: Callable[[T], Awaitable[bool] | bool],
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[bool]:
    """Determine whether every element satisfies a predicate.

    Short-circuits on the first element that fails. An empty sequence
    satisfies any predicate.
    """
    sequence = as_sequence(source, "all")
    require_callable(predicate, "predicate", "all")
    return _all(sequence, predicate, token)


def any_(
    source: AsyncSequence[T],
    predicate: Optional[Callable[[T], Awaitable[bool] | bool]] = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[bool]:
    """Determine whether the sequence has any element (matching a predicate)."""
    sequence = as_sequence(source, "any")
    if predicate is not None:
        require_callable(predicate, "predicate", "any")
    return _any(sequence, predicate, token)


def count(
    source: AsyncSequence[T],
    predicate: Optional[Callable[[T], Awaitable[bool] | bool]] = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[int]:
    """Count the elements, or the elements matching a predicate.

    The result is a Python int, which has arbitrary precision and therefore
    cannot overflow however long the sequence is.
    """
    sequence = as_sequence(source, "count")
    if predicate is not None:
        require_callable(predicate, "predicate", "count")
    return _count(sequence, predicate, token)


def contains(
    source: AsyncSequence[T],
    item: T,
    comparer: Optional[EqualityComparer[T]] = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[bool]:
    """Determine whether the sequence contains an item.

    Args:
        source: The sequence to search
        item: The item to look for
        comparer: Equality to use; defaults to ``==``
        token: Optional cancellation token
    """
    sequence = as_sequence(source, "contains")
    resolved = resolve_comparer(comparer, "contains")
    return _contains(sequence, item, resolved, token)


def sequence_equals(
    source: AsyncSequence[T],
    other: AsyncSequence[T],
    comparer: Optional[EqualityComparer[T]] = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[bool]:
    """Determine whether two sequences have equal elements in the same order.

    Both sequences are advanced in lockstep, source first; the result is
    False as soon as a pair differs or one sequence ends before the other.
    """
    sequence = as_sequence(source, "sequence_equals")
    target = as_sequence(other, "sequence_equals", "other")
    resolved = resolve_comparer(comparer, "sequence_equals")
    return _sequence_equals(sequence, target, resolved, token)


async def _reduce(sequence, reducer, initial, token):
    async with sequence.cursor(token) as cursor:
        if initial is NOT_PROVIDED:
            if not await cursor.advance():
                raise EmptySequenceError(
                    "cannot reduce empty sequence without initial value", "reduce"
                )
            accumulator = cursor.current
        else:
            accumulator = initial

        while await cursor.advance():
            accumulator = await maybe_await(reducer(accumulator, cursor.current))
    return accumulator


def reduce(
    source: AsyncSequence[T],
    reducer: Callable[[U, T], Awaitable[U] | U],
    initial: U | _NotProvided = NOT_PROVIDED,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[U]:
    """Fold the sequence from left to right into a single value.

    This is the asynchronous counterpart of ``functools.reduce``. The reducer
    may be synchronous or asynchronous.

    Args:
        source: The sequence to reduce
        reducer: Binary function taking (accumulator, element)
        initial: Optional starting accumulator. If not provided, the first
                element is used as the starting accumulator.
        token: Optional cancellation token

    Returns:
        The final accumulated value

    Raises:
        InvalidArgument: If source or reducer is None
        EmptySequenceError: If the sequence is empty and no initial value is given

    Examples:
        >>> await reduce([1, 2, 3, 4, 5], lambda acc, x: acc + x)
        15
        >>> await reduce([2, 3, 4], lambda acc, x: acc * x, 1)
        24
        >>> await reduce([], lambda acc, x: acc + x, "empty")
        'empty'
    """
    sequence = as_sequence(source, "reduce")
    require_callable(reducer, "reducer", "reduce")
    return _reduce(sequence, reducer, initial, token)


async def _for_each(sequence, action, token):
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            await maybe_await(action(cursor.current))


async def _for_each_async(sequence, action, token):
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            await cancellable(
                action(cursor.current, cursor.token), cursor.token, "for_each_async"
            )


def for_each(
    source: AsyncSequence[T],
    action: Callable[[T], Any],
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[None]:
    """Run an action for every element of the sequence, in order.

    If the action returns an awaitable it is awaited before the next
    element is pulled.
    """
    sequence = as_sequence(source, "for_each")
    require_callable(action, "action", "for_each")
    return _for_each(sequence, action, token)


def for_each_async(
    source: AsyncSequence[T],
    action: Callable[[T, CancellationToken], Awaitable[Any]],
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[None]:
    """Run an async action receiving ``(element, token)`` for every element.

    The action is aborted with OperationCancelled if the token fires while
    it is running.
    """
    sequence = as_sequence(source, "for_each_async")
    require_callable(action, "action", "for_each_async")
    return _for_each_async(sequence, action, token)
