"""Policy enums and type aliases shared by the collection helpers."""

from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from redis_toolkit.errors import UnsupportedTypeError

T = TypeVar("T")
R = TypeVar("R")
U = TypeVar("U")
C = TypeVar("C")

KeyFunction = Callable[[T], R]
OrderFunction = Callable[[T], Any]
ValueFunction = Callable[[T], C]
Predicate = Callable[[T], bool]

E = TypeVar("E", bound=Enum)


class ComparableType(str, Enum):
    """Which record wins when several records share a key."""

    MAX = "MAX"  # greatest order key wins
    MIN = "MIN"  # least order key wins


class OrderType(str, Enum):
    """Sort direction for top-N style selection."""

    DESC = "DESC"
    ASC = "ASC"


def coerce_policy(value: Any, enum_cls: type[E]) -> E:
    """Resolve ``value`` to a member of ``enum_cls``.

    Members and their string values are accepted. Anything else raises
    UnsupportedTypeError.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise UnsupportedTypeError(value, enum_cls) from None
