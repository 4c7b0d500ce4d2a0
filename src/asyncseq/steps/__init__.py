from .apply import Apply, apply
from .concat import (
    Append,
    AppendAll,
    Concat,
    Prepend,
    PrependAll,
    append,
    append_all,
    concat,
    prepend,
    prepend_all,
)
from .distinct import Distinct, distinct
from .filter import Filter, filter
from .flat_map import FlatMap, flat_map
from .map import Map, MapAsync, map, map_async
from .of_type import OfType, of_type
from .skip import Skip, skip
from .take import Take, take
from .zip import Zip, ZipAsync, zip, zip_async

__all__ = [
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
    "append",
    "append_all",
    "apply",
    "concat",
    "distinct",
    "filter",
    "flat_map",
    "map",
    "map_async",
    "of_type",
    "prepend",
    "prepend_all",
    "skip",
    "take",
    "zip",
    "zip_async",
]
