"""Unit tests for QueryOptions validation."""

import pytest
from pydantic import ValidationError

from laakhay.rtdb import QueryOptions


class TestQueryOptionsValid:
    """Accepted combinations."""

    def test_empty(self):
        options = QueryOptions()
        assert options.has_constraints() is False

    def test_order_only(self):
        options = QueryOptions(order_by="$key")
        assert options.has_constraints() is False

    def test_range_with_limit(self):
        options = QueryOptions(order_by="score", start_at=10, end_at=20, limit_to_first=5)
        assert options.has_constraints() is True

    def test_exclusive_bounds(self):
        options = QueryOptions(order_by="$key", start_after="a", end_before="z")
        assert options.start_after == "a"

    def test_equal_to_with_limit(self):
        options = QueryOptions(order_by="status", equal_to="active", limit_to_first=3)
        assert options.equal_to == "active"

    @pytest.mark.parametrize("value", [True, 3, 2.5, "x"])
    def test_value_types_preserved(self, value):
        options = QueryOptions(order_by="f", equal_to=value)
        assert options.equal_to == value
        assert type(options.equal_to) is type(value)


class TestQueryOptionsInvalid:
    """Rejected combinations."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"order_by": "$key", "limit_to_first": 1, "limit_to_last": 1},
            {"order_by": "f", "equal_to": 1, "start_at": 0},
            {"order_by": "f", "equal_to": 1, "end_before": 9},
            {"order_by": "f", "start_at": 1, "start_after": 1},
            {"order_by": "f", "end_at": 1, "end_before": 1},
            {"limit_to_first": 3},
            {"equal_to": "x"},
            {"order_by": "$key", "limit_to_first": 0},
            {"order_by": "$key", "limit_to_last": -2},
            {"order_by": ""},
        ],
    )
    def test_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            QueryOptions(**kwargs)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            QueryOptions(limit_to_last=2)
