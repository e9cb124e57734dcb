"""Generic collection utilities.

- reducer: keyed list-to-map reduction with MAX/MIN tie-breaking, grouping
- selection: top-N, limit and skip helpers
- transforms: None-tolerant emptiness checks, map and filter helpers
"""

from .reducer import group_by_list, group_by_list_mapping, list_to_map, reduce_to_map
from .selection import limit_list, limit_one, limit_set, skip_list, top_n
from .transforms import (
    contains,
    conversion_list,
    conversion_set,
    filter_list,
    filter_set,
    is_empty,
    non_empty,
)
from .types import ComparableType, OrderType

__all__ = [
    # Policies
    "ComparableType",
    "OrderType",
    # Reduction
    "reduce_to_map",
    "list_to_map",
    "group_by_list",
    "group_by_list_mapping",
    # Selection
    "top_n",
    "limit_list",
    "limit_set",
    "limit_one",
    "skip_list",
    # Transforms
    "conversion_list",
    "conversion_set",
    "filter_list",
    "filter_set",
    "is_empty",
    "non_empty",
    "contains",
]
