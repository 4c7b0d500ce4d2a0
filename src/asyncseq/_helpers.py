"""Argument checks and small utilities shared by steps and terminals."""

import inspect
from typing import Any, Awaitable, TypeVar

from asyncseq.errors import InvalidArgument

T = TypeVar("T")


class _NotProvided:
    """Sentinel to indicate no value was provided.

    This is used to distinguish between an explicit None argument and no
    argument being provided at all.
    """

    def __repr__(self):
        return "NOT_PROVIDED"


NOT_PROVIDED = _NotProvided()


def require(value: Any, name: str, operation: str) -> None:
    """Raise InvalidArgument if a required argument is absent."""
    if value is None:
        raise InvalidArgument(name, "must not be None", operation)


def require_callable(value: Any, name: str, operation: str) -> None:
    require(value, name, operation)
    if not callable(value):
        raise InvalidArgument(
            name, f"must be callable, got {type(value).__name__}", operation
        )


def require_count(value: Any, name: str, operation: str) -> int:
    """Validate a skip/take/index count.

    Counts are plain Python ints, so they cannot overflow; bool is rejected
    even though it subclasses int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(
            name, f"must be an integer, got {type(value).__name__}", operation
        )
    if value < 0:
        raise InvalidArgument(name, f"must be >= 0, got {value}", operation)
    return value


async def maybe_await(result: Awaitable[T] | T) -> T:
    """Await the result of a callback if it returned an awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result


def resolve_comparer(comparer: Any, operation: str):
    """Return the comparer to use, defaulting to natural equality when None."""
    from asyncseq.comparers import DEFAULT_COMPARER

    if comparer is None:
        return DEFAULT_COMPARER
    if not (callable(getattr(comparer, "equals", None)) and callable(getattr(comparer, "hash", None))):
        raise InvalidArgument(
            "comparer",
            f"must provide equals() and hash(), got {type(comparer).__name__}",
            operation,
        )
    return comparer
