"""Keyed reduction: grouping and list-to-map conversion.

``reduce_to_map`` turns a sequence of records into a dict with one entry per
distinct key. When several records share a key, the record with the greatest
(MAX) or least (MIN) order key wins; among equal order keys the record seen
first wins.
"""

from collections import defaultdict
from collections.abc import Iterable

from redis_toolkit.errors import UnsupportedTypeError

from .types import (
    C,
    ComparableType,
    KeyFunction,
    OrderFunction,
    R,
    T,
    ValueFunction,
    coerce_policy,
)


def _identity(record: T) -> T:
    return record


def group_by_list(records: Iterable[T] | None, key_fn: KeyFunction[T, R]) -> dict[R, list[T]]:
    """Group records by key.

    Keys appear in first-seen order, and each group keeps input order.

    Example:
        >>> group_by_list(["ab", "b", "ac"], lambda s: s[0])
        {'a': ['ab', 'ac'], 'b': ['b']}
    """
    return group_by_list_mapping(records, key_fn, _identity)


def group_by_list_mapping(
    records: Iterable[T] | None,
    key_fn: KeyFunction[T, R],
    mapping_fn: ValueFunction[T, C],
) -> dict[R, list[C]]:
    """Group records by key, storing ``mapping_fn(record)`` in each group."""
    groups: defaultdict[R, list[C]] = defaultdict(list)
    for record in records or ():
        groups[key_fn(record)].append(mapping_fn(record))
    return dict(groups)


def reduce_to_map(
    records: Iterable[T] | None,
    key_fn: KeyFunction[T, R],
    order_fn: OrderFunction[T],
    value_fn: ValueFunction[T, C] | None = None,
    tie_break: ComparableType | str = ComparableType.MAX,
) -> dict[R, C]:
    """Convert records into a mapping of ``key_fn(r) -> value_fn(r)``.

    Args:
        records: Input records. ``None`` is treated as empty input.
        key_fn: Derives the mapping key. Results must be hashable.
        order_fn: Derives the order key used to pick a winner among records
            sharing a key. Never called when all keys are distinct.
        value_fn: Derives the stored value (defaults to the record itself).
        tie_break: ``MAX`` keeps the record with the greatest order key,
            ``MIN`` the one with the least.

    Returns:
        Dict with exactly one entry per distinct key, in first-seen order.

    Raises:
        UnsupportedTypeError: If ``tie_break`` is not MAX or MIN.
    """
    policy = coerce_policy(tie_break, ComparableType)
    if value_fn is None:
        value_fn = _identity

    if records is None:
        return {}
    records = list(records)
    if not records:
        return {}

    keys = [key_fn(record) for record in records]
    if len(set(keys)) == len(records):
        return {key: value_fn(record) for key, record in zip(keys, records)}

    # max()/min() return the first extreme element, so ties keep the earliest record
    if policy is ComparableType.MAX:
        select = max
    elif policy is ComparableType.MIN:
        select = min
    else:
        raise UnsupportedTypeError(policy, ComparableType)

    groups: defaultdict[R, list[T]] = defaultdict(list)
    for key, record in zip(keys, records):
        groups[key].append(record)
    return {key: value_fn(select(group, key=order_fn)) for key, group in groups.items()}


list_to_map = reduce_to_map
