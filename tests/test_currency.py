"""Unit tests for portfolio_engine/core/currency.py."""

import pytest

from portfolio_engine.core.currency import (
    format_currency,
    format_currency_range,
    get_currency_config,
    get_hourly_rate,
)


@pytest.mark.parametrize(
    "code,rate",
    [("GBP", 45), ("USD", 55), ("EUR", 50), ("CAD", 60)],
)
def test_hourly_rates(code, rate):
    assert get_hourly_rate(code) == rate


def test_lookup_is_case_insensitive():
    assert get_currency_config("usd").symbol == "$"


@pytest.mark.parametrize("code", [None, "", "JPY"])
def test_unknown_falls_back_to_gbp(code):
    assert get_currency_config(code).code == "GBP"


class TestFormatCurrency:
    def test_thousands_separator(self):
        assert format_currency(18750) == "£18,750"

    def test_rounds_to_whole_units(self):
        assert format_currency(1234.6, "USD") == "$1,235"

    def test_negative(self):
        assert format_currency(-1200, "CAD") == "-C$1,200"

    def test_range(self):
        assert format_currency_range(18750, 31250) == "£18,750 - £31,250"
