"""Unit tests for core enumerations."""

import pytest

from laakhay.rtdb.core import BatchOpType, HttpMethod, OrderKey


class TestBatchOpType:
    """Test BatchOpType values."""

    @pytest.mark.parametrize(
        "raw,expected", [("set", BatchOpType.SET), ("delete", BatchOpType.DELETE)]
    )
    def test_from_string(self, raw, expected):
        assert BatchOpType(raw) is expected

    def test_is_str(self):
        assert BatchOpType.UPDATE == "update"

    def test_rejects_unknown(self):
        with pytest.raises(ValueError):
            BatchOpType("upsert")


class TestOrderKey:
    """Test ordering pseudo-fields."""

    def test_values(self):
        assert OrderKey.KEY.value == "$key"
        assert OrderKey.VALUE.value == "$value"
        assert OrderKey.PRIORITY.value == "$priority"


def test_http_methods():
    assert {m.value for m in HttpMethod} == {"GET", "PUT", "PATCH", "POST", "DELETE"}
