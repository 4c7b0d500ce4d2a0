"""Equality comparers used by Distinct, contains and sequence_equals."""

from typing import Any, Callable, Generic, Hashable, TypeVar

T = TypeVar("T")


class EqualityComparer(Generic[T]):
    """Capability object defining element equality and hashing.

    Subclasses override ``equals`` and ``hash``; the two must agree, i.e.
    elements that compare equal must hash equally.
    """

    def equals(self, a: T, b: T) -> bool:
        raise NotImplementedError

    def hash(self, value: T) -> int:
        raise NotImplementedError


class DefaultComparer(EqualityComparer[Any]):
    """Natural equality: ``==`` and the built-in ``hash``."""

    def equals(self, a: Any, b: Any) -> bool:
        return a == b

    def hash(self, value: Any) -> int:
        return hash(value)


class KeyComparer(EqualityComparer[T]):
    """Compare elements by a key extracted from each one.

    Example:
        >>> comparer = KeyComparer(str.lower)
        >>> comparer.equals("Hello", "HELLO")
        True
    """

    def __init__(self, key: Callable[[T], Hashable]):
        self.key = key

    def equals(self, a: T, b: T) -> bool:
        return self.key(a) == self.key(b)

    def hash(self, value: T) -> int:
        return hash(self.key(value))


DEFAULT_COMPARER = DefaultComparer()


class ComparerKey:
    """Wraps an element so sets and dicts use a comparer's semantics."""

    __slots__ = ("value", "comparer", "_hash")

    def __init__(self, value: Any, comparer: EqualityComparer[Any]):
        self.value = value
        self.comparer = comparer
        self._hash = comparer.hash(value)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparerKey):
            return NotImplemented
        return self.comparer.equals(self.value, other.value)
