"""Tests for top-N, limit and skip selection."""

from collections.abc import Iterator

import pytest

from redis_toolkit.collection import (
    OrderType,
    limit_list,
    limit_one,
    limit_set,
    skip_list,
    top_n,
)
from redis_toolkit.errors import UnsupportedTypeError

NUMBERS = [3, 1, 4, 1, 5, 9, 2, 6]


def identity(x):
    return x


class TestTopN:
    def test_desc_top_three(self):
        assert list(top_n(NUMBERS, identity, 3)) == [9, 6, 5]

    def test_asc_top_three(self):
        assert list(top_n(NUMBERS, identity, 3, order_type=OrderType.ASC)) == [1, 1, 2]

    def test_skip(self):
        assert list(top_n(NUMBERS, identity, 2, skip=1)) == [6, 5]

    def test_returns_lazy_iterator(self):
        calls = []

        def tracking(x):
            calls.append(x)
            return x

        result = top_n(NUMBERS, tracking, 3)

        assert isinstance(result, Iterator)
        assert calls == []
        assert next(result) == 9
        assert len(calls) == len(NUMBERS)

    def test_desc_ties_come_out_in_reverse_input_order(self):
        """Test DESC reverses an ascending stable sort."""
        records = [("a", 1), ("b", 2), ("c", 1), ("d", 2)]

        result = list(top_n(records, lambda r: r[1], 4))

        assert result == [("d", 2), ("b", 2), ("c", 1), ("a", 1)]

    def test_asc_ties_keep_input_order(self):
        records = [("a", 1), ("b", 2), ("c", 1)]

        result = list(top_n(records, lambda r: r[1], 3, order_type="ASC"))

        assert result == [("a", 1), ("c", 1), ("b", 2)]

    def test_limit_larger_than_input(self):
        assert list(top_n([2, 1], identity, 10)) == [2, 1]

    def test_none_input(self):
        assert list(top_n(None, identity, 3)) == []

    def test_invalid_order_type_raises_immediately(self):
        with pytest.raises(UnsupportedTypeError):
            top_n(NUMBERS, identity, 3, order_type="RANDOM")

    def test_negative_skip_raises(self):
        with pytest.raises(ValueError):
            top_n(NUMBERS, identity, 3, skip=-1)


class TestLimitAndSkip:
    def test_limit_list_without_order_keeps_input_order(self):
        assert limit_list(NUMBERS, 3) == [3, 1, 4]

    def test_limit_list_sorted(self):
        assert limit_list(NUMBERS, 3, identity) == [9, 6, 5]

    def test_limit_list_skip_and_asc(self):
        assert limit_list(NUMBERS, 2, identity, skip=2, order_type=OrderType.ASC) == [2, 3]

    def test_limit_set(self):
        assert limit_set(NUMBERS, 4) == {3, 1, 4}

    def test_limit_one_unsorted(self):
        assert limit_one(NUMBERS) == 3

    def test_limit_one_sorted_desc(self):
        assert limit_one(NUMBERS, identity) == 9

    def test_limit_one_skip_past_end(self):
        assert limit_one(NUMBERS, identity, skip=100) is None

    def test_limit_one_empty(self):
        assert limit_one([]) is None

    def test_skip_list_unsorted(self):
        assert skip_list(NUMBERS, 5) == [9, 2, 6]

    def test_skip_list_sorted(self):
        assert skip_list(NUMBERS, 5, identity) == [2, 1, 1]

    def test_skip_list_asc(self):
        assert skip_list(NUMBERS, 6, identity, OrderType.ASC) == [6, 9]
