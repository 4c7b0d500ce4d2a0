from .aggregate import (
    all_,
    any_,
    contains,
    count,
    for_each,
    for_each_async,
    reduce,
    sequence_equals,
)
from .collect import to_dict, to_list, to_set, to_tuple
from .element import (
    element_at,
    element_at_or_default,
    first,
    first_or_default,
    last,
    last_or_default,
    single,
    single_or_default,
)
from .synchronous import to_synchronous

__all__ = [
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
