"""Boundary validation package."""

from networthview.errors import (
    CategoryTypeMismatch,
    InputValidationError,
    InvalidAmount,
    InvalidCategoryName,
    InvalidDateRange,
    UnknownCategory,
)
from networthview.validation.validator import (
    InputValidator,
    sanitize_string,
    to_decimal,
    validate_amount,
    validate_date_not_future,
    validate_date_range,
    validate_non_empty,
)

__all__ = [
    # Validator
    "InputValidator",
    # Primitive checks
    "sanitize_string",
    "to_decimal",
    "validate_amount",
    "validate_date_not_future",
    "validate_date_range",
    "validate_non_empty",
    # Exceptions
    "CategoryTypeMismatch",
    "InputValidationError",
    "InvalidAmount",
    "InvalidCategoryName",
    "InvalidDateRange",
    "UnknownCategory",
]
