"""Error types raised by asyncseq operations."""

from typing import Optional


class SequenceError(Exception):
    """Base class for every fault raised by the library itself.

    Exceptions raised by caller-supplied predicates, selectors, actions or
    comparers are never wrapped in a SequenceError; they propagate unchanged.
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        """Create a sequence error.

        Args:
            message: Human-readable description of the failure.
            operation: Optional name of the public operation that failed.

        """
        self.operation = operation
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message)


class InvalidArgument(SequenceError, ValueError):
    """A required argument was absent or outside its accepted range."""

    def __init__(self, argument: str, message: str, operation: Optional[str] = None):
        self.argument = argument
        super().__init__(f"{argument} {message}", operation)


class EmptySequenceError(SequenceError, LookupError):
    """A sequence that had to contain at least one element was empty."""

    def __init__(
        self,
        message: str = "sequence contains no elements",
        operation: Optional[str] = None,
    ):
        super().__init__(message, operation)


class NoMatchedItemsError(EmptySequenceError):
    """The sequence had elements but none of them satisfied the predicate."""

    def __init__(
        self,
        message: str = "sequence contains no matching elements",
        operation: Optional[str] = None,
    ):
        super().__init__(message, operation)


class MultipleMatchesError(SequenceError, LookupError):
    """More than one element qualified where exactly one was required."""

    def __init__(
        self,
        message: str = "sequence contains more than one matching element",
        operation: Optional[str] = None,
    ):
        super().__init__(message, operation)


class OperationCancelled(SequenceError):
    """A cancellation token was triggered before the operation completed."""

    def __init__(
        self, message: str = "operation was cancelled", operation: Optional[str] = None
    ):
        super().__init__(message, operation)


class CursorStateError(SequenceError, RuntimeError):
    """A cursor was used outside of its valid lifecycle."""


class IndexOutOfRange(SequenceError, IndexError):
    """An element index pointed past the end of the sequence."""

    def __init__(self, index: int, operation: Optional[str] = None):
        self.index = index
        super().__init__(f"index {index} is out of range", operation)


class DuplicateKeyError(SequenceError, KeyError):
    """Two elements produced the same key while building a mapping."""

    def __init__(self, key, operation: Optional[str] = None):
        self.key = key
        super().__init__(f"duplicate key {key!r}", operation)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the whole message
        return self.args[0]
