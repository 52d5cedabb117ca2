"""
Tests for display formatters.
"""

import pytest

from quotegateway.formatting import (
    format_market_cap,
    format_percentage,
    format_price,
    format_volume,
)


class TestFormatMarketCap:
    """Tests for format_market_cap."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (2_750_000_000_000, "$2.75T"),
            (138_500_000_000, "$138.50B"),
            (1_000_000_000, "$1.00B"),
            (45_600_000, "$45.60M"),
            (950_000, "$950,000"),
            (1234.5, "$1,234.5"),
            (0, "$0"),
        ],
    )
    def test_buckets(self, value, expected):
        assert format_market_cap(value) == expected


class TestFormatVolume:
    """Tests for format_volume."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1_200_000_000, "1.20B"),
            (45_678_900, "45.68M"),
            (52_000, "52.00K"),
            (999, "999"),
            (0, "0"),
        ],
    )
    def test_buckets(self, value, expected):
        assert format_volume(value) == expected


class TestFormatPrice:
    """Tests for format_price."""

    def test_rounds_to_cents(self):
        assert format_price(175.426) == "$175.43"

    def test_pads_to_two_decimals(self):
        assert format_price(3) == "$3.00"


class TestFormatPercentage:
    """Tests for format_percentage."""

    def test_negative(self):
        assert format_percentage(-1.24) == "-1.24%"

    def test_positive_has_plus(self):
        assert format_percentage(1.24) == "+1.24%"

    def test_zero_has_plus(self):
        assert format_percentage(0) == "+0.00%"
        assert format_percentage(-0.0) == "+0.00%"
