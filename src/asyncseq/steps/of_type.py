from typing import Tuple, Type, Union

from asyncseq.base import AsyncSequence, Step, T, U
from asyncseq.cancellation import CancellationToken
from asyncseq.cursor import Cursor, UpstreamCursor
from asyncseq.errors import InvalidArgument
from asyncseq._helpers import require


class _OfTypeCursor(UpstreamCursor[T, U]):
    def __init__(self, upstream: Cursor[T], types: Union[Type[U], Tuple[type, ...]]):
        super().__init__(upstream)
        self.types = types

    async def _move_next(self) -> bool:
        while await self.upstream.advance():
            item = self.upstream.current
            if isinstance(item, self.types):
                self._current = item
                return True
        return False


class _OfTypeSequence(AsyncSequence[U]):
    def __init__(self, source: AsyncSequence[T], types):
        self.source = source
        self.types = types

    def _create_cursor(self, token: CancellationToken) -> Cursor[U]:
        return _OfTypeCursor(self.source.cursor(token), self.types)


class OfType(Step[T, U]):
    """Step keeping only the elements that are instances of a type.

    Accepts a single class or a tuple of classes, with ``isinstance``
    semantics, so subclasses match too.

    Example:
        >>> await ([1, "a", 2.5, "b"] | OfType(str)).collect()
        ['a', 'b']
    """

    def __init__(self, types: Union[Type[U], Tuple[type, ...]]):
        require(types, "types", "OfType")
        if not isinstance(types, (type, tuple)):
            raise InvalidArgument(
                "types",
                f"must be a class or tuple of classes, got {type(types).__name__}",
                "OfType",
            )
        self.types = types

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[U]:
        return _OfTypeSequence(source, self.types)


def of_type(types: Union[Type[U], Tuple[type, ...]]) -> OfType[T, U]:
    return OfType(types)
