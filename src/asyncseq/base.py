from abc import ABC, abstractmethod
from typing import Any, AsyncIterable, AsyncIterator, Generic, Iterable, List, Optional, TypeVar, Union

from asyncseq.cancellation import CancellationToken
from asyncseq.cursor import Cursor

# Type variables
T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")


class AsyncSequence(ABC, Generic[T]):
    """A lazy, pull-based asynchronous sequence.

    An AsyncSequence is an immutable factory for cursors. Building a sequence
    (for example by piping it through steps) never touches its upstream;
    elements are only produced when a cursor obtained from ``cursor()`` is
    advanced. Every call to ``cursor()`` allocates fresh cursor state, so a
    sequence may be iterated several times, one cursor after another.

    Sequences support:
    - Chaining steps: sequence | Filter(pred) | Map(func)
    - Async iteration: async for item in sequence
    - Explicit cursors: async with sequence.cursor(token) as cursor

    Example:
        >>> sequence = [1, 3, 5, 7, 9, 2, 4, 6, 8] | Filter(lambda x: x % 2 == 0)
        >>> await (sequence | Map(lambda x: x * x) | Take(2)).collect()
        [4, 16]
    """

    def cursor(self, token: Optional[CancellationToken] = None) -> Cursor[T]:
        """Obtain a new cursor positioned before the first element.

        Args:
            token: Optional cancellation token observed by the cursor and by
                every upstream cursor it acquires.

        Returns:
            A cursor that the caller must dispose
        """
        if token is None:
            token = CancellationToken.none()
        return self._create_cursor(token)

    @abstractmethod
    def _create_cursor(self, token: CancellationToken) -> Cursor[T]:
        """Build the cursor that implements this sequence.

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    async def iterate(
        self, token: Optional[CancellationToken] = None
    ) -> AsyncIterator[T]:
        """Yield every element, disposing the cursor when iteration stops.

        Args:
            token: Optional cancellation token

        Yields:
            The elements of the sequence in order
        """
        async with self.cursor(token) as cursor:
            while await cursor.advance():
                yield cursor.current

    def __aiter__(self) -> AsyncIterator[T]:
        return self.iterate()

    def __or__(self, other: "Step[T, U]") -> "AsyncSequence[U]":
        """Apply a step to this sequence using the | operator."""
        if isinstance(other, Step):
            return other.apply(self)
        return NotImplemented

    async def collect(self, token: Optional[CancellationToken] = None) -> List[T]:
        """Materialize the sequence into a list.

        This is a convenience wrapper around ``asyncseq.terminals.to_list``.
        """
        from .terminals import to_list

        return await to_list(self, token=token)


class Step(ABC, Generic[T, U]):
    """Base class for reusable sequence transformations.

    A Step describes how to turn one AsyncSequence[T] into an
    AsyncSequence[U] without holding on to any particular source. Steps can
    be:
    - Applied to data: data | step, or step.apply(data)
    - Chained together: step1 | step2 | step3 (producing a Pipeline)

    Step constructors validate their arguments eagerly, and applying a step
    validates the source, so misuse fails before any element is pulled.

    Subclasses must implement _build_sequence to define their logic.
    """

    def __or__(self, other: "Step[U, V]") -> "Pipeline[T, V]":
        """Chain this step with another using the | operator."""
        if isinstance(other, Step):
            return self.then(other)
        return NotImplemented

    def __ror__(
        self, other: Union[AsyncSequence[T], Iterable[T], AsyncIterable[T], None]
    ) -> AsyncSequence[U]:
        """Support data | step syntax (reverse pipe operator)."""
        return self.apply(other)

    def then(self, other: "Step[U, V]") -> "Pipeline[T, V]":
        """Chain this step with another step or pipeline.

        Args:
            other: The step or pipeline to run after this one

        Returns:
            A new Pipeline containing both steps/all steps
        """
        if isinstance(other, Pipeline):
            return Pipeline([self] + other.steps)
        return Pipeline([self, other])

    def apply(
        self, source: Union[AsyncSequence[T], Iterable[T], AsyncIterable[T], None]
    ) -> AsyncSequence[U]:
        """Build the sequence produced by this step over a source.

        Args:
            source: A sequence, or a plain or async iterable to wrap

        Returns:
            A new lazy sequence

        Raises:
            InvalidArgument: If the source is None or not iterable
        """
        from .sources import as_sequence

        return self._build_sequence(as_sequence(source, type(self).__name__))

    @abstractmethod
    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[U]:
        """Build the sequence implementing this step over a validated source.

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError


class Pipeline(Step[T, U]):
    """A reusable chain of steps.

    Pipelines are produced by chaining steps with ``|`` and can themselves be
    chained or applied to data like any other step.

    Example:
        >>> evens_squared = Filter(lambda x: x % 2 == 0) | Map(lambda x: x * x)
        >>> await (range(5) | evens_squared).collect()
        [0, 4, 16]

    Attributes:
        steps: List of steps applied in order
    """

    steps: List[Step[Any, Any]]

    def __init__(self, steps: List[Step[Any, Any]]):
        """Initialize a new Pipeline.

        Args:
            steps: List of steps to apply in sequence
        """
        from .errors import InvalidArgument

        if not isinstance(steps, list):
            raise InvalidArgument(
                "steps", f"must be a list, got {type(steps).__name__}", "Pipeline"
            )
        for step in steps:
            if not isinstance(step, Step):
                raise InvalidArgument(
                    "steps", f"must contain steps, got {type(step).__name__}", "Pipeline"
                )

        self.steps = steps

    def _build_sequence(self, source: AsyncSequence[T]) -> AsyncSequence[U]:
        sequence: AsyncSequence[Any] = source
        for step in self.steps:
            sequence = step.apply(sequence)
        return sequence

    def then(self, other: Step[U, V]) -> "Pipeline[T, V]":
        """Chain this pipeline with another step or pipeline."""
        if isinstance(other, Pipeline):
            return Pipeline(self.steps + other.steps)
        return Pipeline(self.steps + [other])
