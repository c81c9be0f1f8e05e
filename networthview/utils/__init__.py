"""Utility helpers."""

from networthview.utils.formatting import (
    format_currency,
    format_date,
    format_date_range,
    format_percentage,
    truncate,
)

__all__ = [
    "format_currency",
    "format_date",
    "format_date_range",
    "format_percentage",
    "truncate",
]
