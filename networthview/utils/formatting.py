"""
Display Formatting Helpers

Used when turning report numbers into user-facing strings.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from networthview.config import get_settings


Number = Union[Decimal, int, float]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
}


def format_currency(amount: Number, currency: Optional[str] = None) -> str:
    """
    Format an amount with its currency symbol and two decimals.

    `currency` defaults to the configured display currency.

    Example:
        >>> format_currency(1000.5)
        '$1,000.50'
        >>> format_currency(-100, "EUR")
        '-€100.00'
    """
    currency = (currency or get_settings().currency).upper()
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percentage(value: Number, decimals: int = 1) -> str:
    """Example: format_percentage(75.555, 2) -> '75.56%'"""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def format_date(value: date) -> str:
    """Example: 'Jan 15, 2024'"""
    return f"{value:%b} {value.day}, {value.year}"


def format_date_range(start: date, end: date) -> str:
    """Example: 'Jan 1 - Jan 31, 2024'"""
    return f"{start:%b} {start.day} - {format_date(end)}"


def truncate(text: str, max_length: int, suffix: str = "...") -> str:
    """Cut `text` to `max_length` characters, suffix included."""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
