"""Emptiness checks and map/filter transforms over collections.

All helpers accept ``None`` and treat it as an empty collection.
"""

from collections.abc import Collection, Iterable, Mapping
from typing import Any

from .types import C, Predicate, T, ValueFunction


def is_empty(collection: Collection[Any] | Mapping[Any, Any] | None) -> bool:
    """Return True if the collection or mapping is None or has no elements."""
    return collection is None or len(collection) == 0


def non_empty(collection: Collection[Any] | Mapping[Any, Any] | None) -> bool:
    """Return True if the collection or mapping has at least one element."""
    return not is_empty(collection)


def contains(collection: Collection[Any] | None, obj: Any) -> bool:
    """Return True if ``obj`` is a member of a non-empty collection."""
    return non_empty(collection) and obj in collection


def conversion_list(collection: Iterable[T] | None, function: ValueFunction[T, C]) -> list[C]:
    """Apply ``function`` to every element and collect the results into a list."""
    if collection is None:
        return []
    return [function(item) for item in collection]


def conversion_set(collection: Iterable[T] | None, function: ValueFunction[T, C]) -> set[C]:
    """Apply ``function`` to every element and collect the results into a set."""
    if collection is None:
        return set()
    return {function(item) for item in collection}


def filter_list(collection: Iterable[T] | None, predicate: Predicate[T]) -> list[T]:
    """Keep the elements matching ``predicate``, in input order."""
    if collection is None:
        return []
    return [item for item in collection if predicate(item)]


def filter_set(collection: Iterable[T] | None, predicate: Predicate[T]) -> set[T]:
    """Keep the elements matching ``predicate`` as a set."""
    if collection is None:
        return set()
    return {item for item in collection if predicate(item)}
