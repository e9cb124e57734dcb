"""Top-N, skip and limit selection over collections.

Sorting is stable. ``DESC`` sorts ascending and then reverses the result, so
elements with equal order keys come out in the reverse of their input order.
"""

from collections.abc import Iterable, Iterator
from itertools import islice

from redis_toolkit.errors import UnsupportedTypeError

from .types import OrderFunction, OrderType, T, coerce_policy


def _check_bounds(skip: int, limit: int | None) -> None:
    if skip < 0:
        raise ValueError(f"skip must be non-negative, got {skip}")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")


def _ordered(records: Iterable[T], order_fn: OrderFunction[T], order_type: OrderType) -> list[T]:
    ordered = sorted(records, key=order_fn)
    if order_type is OrderType.DESC:
        ordered.reverse()
    elif order_type is not OrderType.ASC:
        raise UnsupportedTypeError(order_type, OrderType)
    return ordered


def top_n(
    records: Iterable[T] | None,
    order_fn: OrderFunction[T] | None,
    limit: int | None,
    skip: int = 0,
    order_type: OrderType | str = OrderType.DESC,
) -> Iterator[T]:
    """Lazily yield up to ``limit`` records after sorting and skipping.

    The sort runs on the first ``next()``. Argument errors are raised at
    call time.

    Args:
        records: Input records. ``None`` yields nothing.
        order_fn: Sort key. ``None`` keeps the input order.
        limit: Maximum number of records to yield (``None`` for no bound).
        skip: Number of leading records to drop after sorting.
        order_type: ``DESC`` (default) or ``ASC``.

    Raises:
        UnsupportedTypeError: If ``order_type`` is not ASC or DESC.
        ValueError: If ``skip`` or ``limit`` is negative.
    """
    direction = coerce_policy(order_type, OrderType)
    _check_bounds(skip, limit)
    stop = None if limit is None else skip + limit

    def _select() -> Iterator[T]:
        if records is None:
            return
        source = records if order_fn is None else _ordered(records, order_fn, direction)
        yield from islice(source, skip, stop)

    return _select()


def limit_list(
    records: Iterable[T] | None,
    limit: int,
    order_fn: OrderFunction[T] | None = None,
    skip: int = 0,
    order_type: OrderType | str = OrderType.DESC,
) -> list[T]:
    """Return the first ``limit`` records as a list.

    Without ``order_fn`` the input order is kept.
    """
    return list(top_n(records, order_fn, limit, skip=skip, order_type=order_type))


def limit_set(records: Iterable[T] | None, limit: int, skip: int = 0) -> set[T]:
    """Return the first ``limit`` records, in input order, as a set."""
    return set(top_n(records, None, limit, skip=skip))


def limit_one(
    records: Iterable[T] | None,
    order_fn: OrderFunction[T] | None = None,
    skip: int = 0,
    order_type: OrderType | str = OrderType.DESC,
) -> T | None:
    """Return the first record after sorting and skipping, or None."""
    return next(top_n(records, order_fn, 1, skip=skip, order_type=order_type), None)


def skip_list(
    records: Iterable[T] | None,
    skip: int,
    order_fn: OrderFunction[T] | None = None,
    order_type: OrderType | str = OrderType.DESC,
) -> list[T]:
    """Return every record after the first ``skip``, optionally sorted first."""
    return list(top_n(records, order_fn, None, skip=skip, order_type=order_type))
