"""
Input Error Taxonomy

Raised at the boundary when user input is rejected. The calculation
package never raises these; it assumes input has already been checked.
"""

from typing import Optional


class InputValidationError(Exception):
    """Base exception for rejected user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidAmount(InputValidationError):
    """Amount is negative, NaN, infinite or not a number."""
    pass


class InvalidDateRange(InputValidationError):
    """Start is after end, or a date lies too far in the future."""
    pass


class UnknownCategory(InputValidationError):
    """Referenced category does not exist for this user."""
    pass


class InvalidCategoryName(InputValidationError):
    """Category name is empty after trimming or too long."""
    pass


class CategoryTypeMismatch(InputValidationError):
    """Transaction type differs from its category's type (only when enforced)."""
    pass


ISSUE_EXCEPTIONS: dict[str, type[InputValidationError]] = {
    "invalid_amount": InvalidAmount,
    "invalid_date_range": InvalidDateRange,
    "future_date": InvalidDateRange,
    "unknown_category": UnknownCategory,
    "invalid_name": InvalidCategoryName,
    "category_type_mismatch": CategoryTypeMismatch,
}
