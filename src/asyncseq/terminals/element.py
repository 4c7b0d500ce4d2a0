"""Element operations: first, last, single and element_at with their default forms.

Every public function here validates its arguments before returning the
coroutine, so passing ``None`` where a sequence is required raises
InvalidArgument immediately, without awaiting.

Fault kinds:
    EmptySequenceError: the source had no elements at all.
    NoMatchedItemsError: the source had elements but none matched the
        predicate (a subclass of EmptySequenceError).
    MultipleMatchesError: ``single`` found more than one qualifying element.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

from asyncseq.base import AsyncSequence
from asyncseq.cancellation import CancellationToken
from asyncseq.errors import (
    EmptySequenceError,
    IndexOutOfRange,
    MultipleMatchesError,
    NoMatchedItemsError,
)
from asyncseq.sources import as_sequence
from asyncseq._helpers import NOT_PROVIDED, maybe_await, require_callable, require_count

T = TypeVar("T")

Predicate = Optional[Callable[[T], Awaitable[bool] | bool]]


def _check(source: Any, predicate: Any, operation: str) -> AsyncSequence[Any]:
    sequence = as_sequence(source, operation)
    if predicate is not None:
        require_callable(predicate, "predicate", operation)
    return sequence


async def _matches(predicate: Predicate[T], item: T) -> bool:
    return predicate is None or bool(await maybe_await(predicate(item)))


def _missing(default: Any, seen_any: bool, predicate: Any, operation: str) -> Any:
    """Return the default, or raise the fault describing why nothing qualified."""
    if default is not NOT_PROVIDED:
        return default
    if predicate is not None and seen_any:
        raise NoMatchedItemsError(operation=operation)
    raise EmptySequenceError(operation=operation)


async def _first(sequence, predicate, default, token, operation):
    seen_any = False
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            seen_any = True
            item = cursor.current
            if await _matches(predicate, item):
                return item
    return _missing(default, seen_any, predicate, operation)


async def _last(sequence, predicate, default, token, operation):
    seen_any = False
    found = False
    last = None
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            seen_any = True
            item = cursor.current
            if await _matches(predicate, item):
                found = True
                last = item
    if found:
        return last
    return _missing(default, seen_any, predicate, operation)


async def _single(sequence, predicate, default, token, operation):
    seen_any = False
    found = False
    match = None
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            seen_any = True
            item = cursor.current
            if not await _matches(predicate, item):
                continue
            if found:
                raise MultipleMatchesError(operation=operation)
            found = True
            match = item
    if found:
        return match
    return _missing(default, seen_any, predicate, operation)


async def _element_at(sequence, index, default, token, operation):
    position = 0
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            if position == index:
                return cursor.current
            position += 1
    if default is not NOT_PROVIDED:
        return default
    raise IndexOutOfRange(index, operation)


def first(
    source: AsyncSequence[T],
    predicate: Predicate[T] = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[T]:
    """Return the first element, or the first element matching a predicate.

    Stops pulling from the source as soon as the element is found.

    Raises:
        InvalidArgument: If source is None or predicate is not callable
        EmptySequenceError: If the source is empty
        NoMatchedItemsError: If no element matched the predicate
    """
    sequence = _check(source, predicate, "first")
    return _first(sequence, predicate, NOT_PROVIDED, token, "first")


def first_or_default(
    source: AsyncSequence[T],
    predicate: Predicate[T] = None,
    *,
    default: Any = None,
    token: Optional[CancellationToken] = None,
) -> Awaitable[Optional[T]]:
    """Return the first (matching) element, or ``default`` if there is none."""
    sequence = _check(source, predicate, "first_or_default")
    return _first(sequence, predicate, default, token, "first_or_default")


def last(
    source: AsyncSequence[T],
    predicate: Predicate[T] = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[T]:
    """Return the last element, or the last element matching a predicate.

    Drains the entire source.

    Raises:
        InvalidArgument: If source is None or predicate is not callable
        EmptySequenceError: If the source is empty
        NoMatchedItemsError: If no element matched the predicate
    """
    sequence = _check(source, predicate, "last")
    return _last(sequence, predicate, NOT_PROVIDED, token, "last")


def last_or_default(
    source: AsyncSequence[T],
    predicate: Predicate[T] = None,
    *,
    default: Any = None,
    token: Optional[CancellationToken] = None,
) -> Awaitable[Optional[T]]:
    sequence = _check(source, predicate, "last_or_default")
    return _last(sequence, predicate, default, token, "last_or_default")


def single(
    source: AsyncSequence[T],
    predicate: Predicate[T] = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[T]:
    """Return the only element, or the only element matching a predicate.

    The source is read until a second qualifying element shows up or the
    source is exhausted.

    Raises:
        InvalidArgument: If source is None or predicate is not callable
        EmptySequenceError: If the source is empty
        NoMatchedItemsError: If no element matched the predicate
        MultipleMatchesError: If more than one element qualified
    """
    sequence = _check(source, predicate, "single")
    return _single(sequence, predicate, NOT_PROVIDED, token, "single")


def single_or_default(
    source: AsyncSequence[T],
    predicate: Predicate[T] = None,
    *,
    default: Any = None,
    token: Optional[CancellationToken] = None,
) -> Awaitable[Optional[T]]:
    """Return the only (matching) element, or ``default`` if there is none.

    Raises:
        MultipleMatchesError: If more than one element qualified
    """
    sequence = _check(source, predicate, "single_or_default")
    return _single(sequence, predicate, default, token, "single_or_default")


def element_at(
    source: AsyncSequence[T],
    index: int,
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[T]:
    """Return the element at a zero-based position.

    Raises:
        InvalidArgument: If source is None or index is negative
        IndexOutOfRange: If the source has ``index`` elements or fewer
    """
    sequence = as_sequence(source, "element_at")
    require_count(index, "index", "element_at")
    return _element_at(sequence, index, NOT_PROVIDED, token, "element_at")


def element_at_or_default(
    source: AsyncSequence[T],
    index: int,
    *,
    default: Any = None,
    token: Optional[CancellationToken] = None,
) -> Awaitable[Optional[T]]:
    sequence = as_sequence(source, "element_at_or_default")
    require_count(index, "index", "element_at_or_default")
    return _element_at(sequence, index, default, token, "element_at_or_default")
