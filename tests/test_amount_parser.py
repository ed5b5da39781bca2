"""Tests for amount parsing and currency formatting."""

import pytest
from decimal import Decimal

from cardcatalog.utils.amount_parser import (
    format_currency,
    parse_amount,
    strip_currency,
    to_currency,
)


class TestStripCurrency:
    """Tests for strip_currency."""

    def test_strips_symbol_and_separators(self):
        assert strip_currency("$1,234.50") == "1234.50"

    def test_keeps_minus(self):
        assert strip_currency("-$5.00") == "-5.00"

    def test_letters_removed(self):
        assert strip_currency("USD 12") == "12"
        assert strip_currency("abc") == ""

    def test_none_is_empty(self):
        assert strip_currency(None) == ""


class TestParseAmount:
    """Tests for parse_amount."""

    def test_plain_and_symbol(self):
        assert parse_amount("123.45") == Decimal("123.45")
        assert parse_amount("$123.45") == Decimal("123.45")
        assert parse_amount("-$123.45") == Decimal("-123.45")
        assert parse_amount("1,234.56") == Decimal("1234.56")

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            parse_amount("")
        with pytest.raises(ValueError):
            parse_amount("   ")

    def test_no_digits_raises(self):
        with pytest.raises(ValueError, match="Could not parse amount"):
            parse_amount("n/a")

    def test_malformed_number_raises(self):
        with pytest.raises(ValueError):
            parse_amount("1.2.3")
        with pytest.raises(ValueError):
            parse_amount("1-2")


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_two_decimals_and_grouping(self):
        assert format_currency(Decimal("1234.5")) == "$1,234.50"
        assert format_currency(Decimal("1000000")) == "$1,000,000.00"

    def test_negative(self):
        assert format_currency(Decimal("-5")) == "-$5.00"

    def test_rounds_half_away_from_zero(self):
        assert format_currency(Decimal("2.345")) == "$2.35"
        assert format_currency(Decimal("-2.345")) == "-$2.35"

    def test_negative_zero_is_zero(self):
        assert format_currency(Decimal("-0.001")) == "$0.00"

    def test_more_digits_than_default_precision(self):
        """Amounts wider than 28 digits keep every digit."""
        assert format_currency(Decimal("9" * 30)) == f"${int('9' * 30):,}.00"
        assert format_currency(Decimal("-" + "1" * 27 + ".555")) == f"-${int('1' * 27):,}.56"

    def test_round_trip_is_fixed_point(self):
        first = to_currency("1234.5")
        assert first == "$1,234.50"
        assert strip_currency(first) == "1234.50"
        assert to_currency(strip_currency(first)) == first


def test_to_currency_rejects_text():
    """Non-numeric text does not format."""
    assert to_currency("ask me") is None
    assert to_currency("") is None
