"""Materialization of sequences into Python containers."""

from typing import Awaitable, Callable, Dict, List, Optional, Set, Tuple, TypeVar

from asyncseq.base import AsyncSequence
from asyncseq.cancellation import CancellationToken
from asyncseq.errors import DuplicateKeyError
from asyncseq.sources import as_sequence
from asyncseq._helpers import require_callable

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


async def _to_list(sequence, token):
    items = []
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            items.append(cursor.current)
    return items


async def _to_tuple(sequence, token):
    return tuple(await _to_list(sequence, token))


async def _to_set(sequence, token):
    items = set()
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            items.add(cursor.current)
    return items


async def _to_dict(sequence, key_selector, value_selector, token):
    result = {}
    async with sequence.cursor(token) as cursor:
        while await cursor.advance():
            item = cursor.current
            key = key_selector(item)
            if key in result:
                raise DuplicateKeyError(key, "to_dict")
            result[key] = value_selector(item)
    return result


def to_list(
    source: AsyncSequence[T], *, token: Optional[CancellationToken] = None
) -> Awaitable[List[T]]:
    """Materialize the sequence into a list, preserving order."""
    sequence = as_sequence(source, "to_list")
    return _to_list(sequence, token)


def to_tuple(
    source: AsyncSequence[T], *, token: Optional[CancellationToken] = None
) -> Awaitable[Tuple[T, ...]]:
    """Materialize the sequence into an immutable, fixed-length tuple."""
    sequence = as_sequence(source, "to_tuple")
    return _to_tuple(sequence, token)


def to_set(
    source: AsyncSequence[T], *, token: Optional[CancellationToken] = None
) -> Awaitable[Set[T]]:
    """Materialize the sequence into a set; elements must be hashable."""
    sequence = as_sequence(source, "to_set")
    return _to_set(sequence, token)


def to_dict(
    source: AsyncSequence[T],
    key_selector: Callable[[T], K],
    value_selector: Callable[[T], V],
    *,
    token: Optional[CancellationToken] = None,
) -> Awaitable[Dict[K, V]]:
    """Materialize the sequence into a dict.

    Unlike ``dict()``, a repeated key is an error rather than an overwrite.

    Args:
        source: The sequence to materialize
        key_selector: Function computing each entry's key
        value_selector: Function computing each entry's value
        token: Optional cancellation token

    Raises:
        InvalidArgument: If source or either selector is None
        DuplicateKeyError: If two elements produce the same key

    Example:
        >>> planets = [Planet("Mercury", 0.33), Planet("Venus", 4.87)]
        >>> await to_dict(planets, lambda p: p.name, lambda p: p.mass)
        {'Mercury': 0.33, 'Venus': 4.87}
    """
    sequence = as_sequence(source, "to_dict")
    require_callable(key_selector, "key_selector", "to_dict")
    require_callable(value_selector, "value_selector", "to_dict")
    return _to_dict(sequence, key_selector, value_selector, token)
