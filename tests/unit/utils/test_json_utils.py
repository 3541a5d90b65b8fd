"""Test JSON helpers."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from ecobank_express.utils.json_utils import compact_dumps, decimal_to_str, dumps


class Channel(Enum):
    QR = 1


class TestDecimalToStr:
    """Test decimal_to_str function."""

    def test_keeps_trailing_zeros(self):
        assert decimal_to_str(Decimal("40.50")) == "40.50"

    def test_no_exponent(self):
        assert decimal_to_str(Decimal("1E+2")) == "100"

    def test_no_float_rounding(self):
        assert decimal_to_str(Decimal("0.1000000000000000055511151231257827")) == (
            "0.1000000000000000055511151231257827"
        )


class TestDumps:
    """Test dumps function."""

    def test_decimal_is_exact_text(self):
        assert dumps({"amount": Decimal("40.50")}) == '{"amount": "40.50"}'
        assert dumps({"amount": Decimal("200")}) == '{"amount": "200"}'

    def test_datetime(self):
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        assert dumps({"at": value}) == '{"at": "2024-01-02T03:04:05+00:00"}'

    def test_enum(self):
        assert dumps({"channel": Channel.QR}) == '{"channel": 1}'

    def test_non_ascii_kept(self):
        assert dumps({"city": "Lomé"}) == '{"city": "Lomé"}'

    def test_preserves_key_order(self):
        assert dumps({"b": 1, "a": 2}) == '{"b": 1, "a": 2}'


class TestCompactDumps:
    """Test compact_dumps function."""

    def test_no_whitespace(self):
        assert compact_dumps({"a": [1, 2]}) == '{"a":[1,2]}'
