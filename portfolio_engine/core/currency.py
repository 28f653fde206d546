"""Currency reference data and display helpers."""

from typing import Optional

from pydantic import BaseModel


class CurrencyConfig(BaseModel):
    code: str
    symbol: str
    name: str
    default_hourly_rate: float


CURRENCY_CONFIG: dict[str, CurrencyConfig] = {
    "GBP": CurrencyConfig(code="GBP", symbol="£", name="British Pound", default_hourly_rate=45),
    "USD": CurrencyConfig(code="USD", symbol="$", name="US Dollar", default_hourly_rate=55),
    "EUR": CurrencyConfig(code="EUR", symbol="€", name="Euro", default_hourly_rate=50),
    "CAD": CurrencyConfig(code="CAD", symbol="C$", name="Canadian Dollar", default_hourly_rate=60),
}

DEFAULT_CURRENCY = "GBP"


def get_currency_config(code: Optional[str] = None) -> CurrencyConfig:
    """Config for a currency code; unknown or missing codes fall back to GBP."""
    if code and code.upper() in CURRENCY_CONFIG:
        return CURRENCY_CONFIG[code.upper()]
    return CURRENCY_CONFIG[DEFAULT_CURRENCY]


def get_hourly_rate(code: Optional[str] = None) -> float:
    return get_currency_config(code).default_hourly_rate


def format_currency(value: float, code: Optional[str] = None) -> str:
    """Whole units with thousands separators, e.g. '£18,750' or '-£1,200'."""
    config = get_currency_config(code)
    sign = "-" if value < 0 else ""
    return f"{sign}{config.symbol}{abs(value):,.0f}"


def format_currency_range(low: float, high: float, code: Optional[str] = None) -> str:
    return f"{format_currency(low, code)} - {format_currency(high, code)}"
