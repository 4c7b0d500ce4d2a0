from typing import Any, Callable, List, Set
import warnings

from asyncseq.base import AsyncSequence, Step, T
from asyncseq.cancellation import CancellationToken
from asyncseq.comparers import DEFAULT_COMPARER, ComparerKey, EqualityComparer
from asyncseq.cursor import Cursor, UpstreamCursor
from asyncseq._helpers import require_callable, resolve_comparer


class _DistinctCursor(UpstreamCursor[T, T]):
    """Cursor that filters out elements equal to one already yielded.

    This cursor tracks the keys it has yielded, using set-based lookup for
    hashable keys and falling back to list-based lookup for unhashable keys
    (like dictionaries) when the default comparer is in use.

    Memory grows with the number of distinct elements and is released when
    the cursor is disposed.
    """

    seen: Set[ComparerKey]
    seen_unhashable: List[Any]

    def __init__(
        self,
        upstream: Cursor[T],
        comparer: EqualityComparer[Any],
        key: Callable[[T], Any] | None,
        max_unhashable_items: int,
    ):
        """Initialize the distinct cursor.

        Args:
            upstream: Cursor to read elements from
            comparer: Equality used to decide whether a key was seen
            key: Optional function to extract the comparison key
            max_unhashable_items: Number of unhashable keys tracked before
                a performance warning is issued
        """
        super().__init__(upstream)
        self.comparer = comparer
        self.key = key
        self.seen = set()
        self.seen_unhashable = []
        self.max_unhashable_items = max_unhashable_items

    async def _move_next(self) -> bool:
        while await self.upstream.advance():
            item = self.upstream.current
            key = self.key(item) if self.key else item
            if self._remember(key):
                self._current = item
                return True
        return False

    def _remember(self, key: Any) -> bool:
        """Record a key, returning False if an equal key was already seen."""
        try:
            wrapped = ComparerKey(key, self.comparer)
        except TypeError:
            # Custom comparers own their hashing errors
            if self.comparer is not DEFAULT_COMPARER:
                raise
            return self._remember_unhashable(key)

        if wrapped in self.seen:
            return False
        self.seen.add(wrapped)
        return True

    def _remember_unhashable(self, key: Any) -> bool:
        if len(self.seen_unhashable) == self.max_unhashable_items:
            warnings.warn(
                "Distinct reached max unhashable items limit. Consider using a different key function to avoid performance degradation."
            )

        if key in self.seen_unhashable:
            return False
        self.seen_unhashable.append(key)
        return True

    async def _cleanup(self):
        """Release memory by clearing tracking structures."""
        self.seen.clear()
        self.seen_unhashable.clear()
        await super()._cleanup()


class _DistinctSequence(AsyncSequence[T]):
    def __init__(
        self,
        source: AsyncSequence[T],
        comparer: EqualityComparer[Any],
        key: Callable[[T], Any] | None,
        max_unhashable_items: int,
    ):
        self.source = source
        self.comparer = comparer
        self.key = key
        self.max_unhashable_items = max_unhashable_items

    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        return _DistinctCursor(
            self.source.cursor(token),
            self.comparer,
            self.key,
            self.max_unhashable_items,
        )


class Distinct(Step[T, T]):
    """Step that removes duplicate elements from a sequence.

    The Distinct step yields each element at most once, keeping the first
    occurrence and preserving first-seen order; it does not sort. Uniqueness
    is decided by a comparer (natural equality by default), optionally
    applied to a key extracted from each element.

    Example:
        >>> # Remove duplicate numbers
        >>> await ([1, 2, 2, 3, 1, 4] | Distinct()).collect()
        [1, 2, 3, 4]

        >>> # Remove duplicates based on length
        >>> words = ["hi", "hello", "world", "bye"]
        >>> await (words | Distinct(key=len)).collect()
        ['hi', 'hello', 'bye']

        >>> # Case-insensitive comparison
        >>> await (["a", "A", "b"] | Distinct(KeyComparer(str.lower))).collect()
        ['a', 'b']

    Performance:
        - O(1) average case for hashable keys (using set)
        - O(n) worst case for unhashable keys (using list)
        - Memory usage grows with number of distinct elements
    """

    def __init__(
        self,
        comparer: EqualityComparer[Any] | None = None,
        *,
        key: Callable[[T], Any] | None = None,
        max_unhashable_items: int = 10000,
    ):
        """Initialize the Distinct step.

        Args:
            comparer: Equality to use; defaults to ``==`` and ``hash``
            key: Optional function to extract comparison key from each element
            max_unhashable_items: Maximum number of unhashable keys to track
                before issuing a performance warning

        Raises:
            InvalidArgument: If comparer lacks equals/hash or key is not callable
        """
        self.comparer = resolve_comparer(comparer, "Distinct")
        if key is not None:
            require_callable(key, "key", "Distinct")
        self.key = key
        self.max_unhashable_items = max_unhashable_items

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[T]:
        return _DistinctSequence(
            source, self.comparer, self.key, self.max_unhashable_items
        )


def distinct(
    comparer: EqualityComparer[Any] | None = None,
    *,
    key: Callable[[T], Any] | None = None,
    max_unhashable_items: int = 10000,
) -> Distinct[T]:
    """Create a distinct step that removes duplicate elements.

    Args:
        comparer: Optional equality comparer. If None, elements (or keys) are
                  compared with ``==``.
        key: Optional function to extract comparison key from each element.
        max_unhashable_items: Maximum number of unhashable keys to track
                             before issuing a performance warning.

    Returns:
        A Distinct step that can be applied to sequences

    Examples:
        >>> # Deduplicate objects by field
        >>> people = [
        ...     {"name": "Alice", "age": 25},
        ...     {"name": "Bob", "age": 30},
        ...     {"name": "Alice", "age": 26}
        ... ]
        >>> unique_names = await (people | distinct(key=lambda p: p["name"])).collect()
        >>> # Only first person with each name

    Warning:
        If tracking many unhashable keys, performance will degrade and
        a warning will be issued at the configured limit.
    """
    return Distinct(comparer, key=key, max_unhashable_items=max_unhashable_items)
