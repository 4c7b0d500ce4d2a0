"""
asyncseq: Lazy, Cancellable Combinators over Asynchronous Sequences

A small library for composing pull-based asynchronous sequences without
materializing them. Pipelines are built from steps and nothing runs until a
terminal operation (or an ``async for``) starts pulling elements.

Key Features:
- Deferred execution: building a pipeline never touches its source
- Single-pass cursors with guaranteed cleanup on every exit path
- Cooperative cancellation through CancellationToken
- Distinct faults for empty sequences, unmatched predicates and multiple matches

Quick Start:
    import asyncseq as s

    # Basic pipeline
    evens = [1, 3, 5, 7, 9, 2, 4, 6, 8] | s.Filter(lambda x: x % 2 == 0)
    result = await (evens | s.Map(lambda x: x * x) | s.Take(2)).collect()  # [4, 16]

    # Terminal operations
    first_big = await s.first(range(100), lambda x: x > 41)

    # Streaming consumption
    async for item in (source | s.MapAsync(fetch) | s.Distinct()):
        process(item)

    # Back to synchronous code
    values = list(s.to_synchronous(s.from_iterable([5, 6, 7])))
"""

import logging

from .base import AsyncSequence, Pipeline, Step
from .cancellation import CancellationToken, cancellable
from .comparers import DefaultComparer, EqualityComparer, KeyComparer
from .cursor import Cursor
from .errors import (
    CursorStateError,
    DuplicateKeyError,
    EmptySequenceError,
    IndexOutOfRange,
    InvalidArgument,
    MultipleMatchesError,
    NoMatchedItemsError,
    OperationCancelled,
    SequenceError,
)
from .sources import as_sequence, empty, from_async_iterable, from_iterable
from .steps import (
    Append,
    AppendAll,
    Apply,
    Concat,
    Distinct,
    Filter,
    FlatMap,
    Map,
    MapAsync,
    OfType,
    Prepend,
    PrependAll,
    Skip,
    Take,
    Zip,
    ZipAsync,
)
from .terminals import (
    all_,
    any_,
    contains,
    count,
    element_at,
    element_at_or_default,
    first,
    first_or_default,
    for_each,
    for_each_async,
    last,
    last_or_default,
    reduce,
    sequence_equals,
    single,
    single_or_default,
    to_dict,
    to_list,
    to_set,
    to_synchronous,
    to_tuple,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AsyncSequence",
    "Pipeline",
    "Step",
    "Cursor",
    "CancellationToken",
    "cancellable",
    "DefaultComparer",
    "EqualityComparer",
    "KeyComparer",
    "CursorStateError",
    "DuplicateKeyError",
    "EmptySequenceError",
    "IndexOutOfRange",
    "InvalidArgument",
    "MultipleMatchesError",
    "NoMatchedItemsError",
    "OperationCancelled",
    "SequenceError",
    "as_sequence",
    "empty",
    "from_async_iterable",
    "from_iterable",
    "Append",
    "AppendAll",
    "Apply",
    "Concat",
    "Distinct",
    "Filter",
    "FlatMap",
    "Map",
    "MapAsync",
    "OfType",
    "Prepend",
    "PrependAll",
    "Skip",
    "Take",
    "Zip",
    "ZipAsync",
    "all_",
    "any_",
    "contains",
    "count",
    "element_at",
    "element_at_or_default",
    "first",
    "first_or_default",
    "for_each",
    "for_each_async",
    "last",
    "last_or_default",
    "reduce",
    "sequence_equals",
    "single",
    "single_or_default",
    "to_dict",
    "to_list",
    "to_set",
    "to_synchronous",
    "to_tuple",
]
