"""
Core Finance Models for NetworthView

These models define the records every other layer works with:
transactions, categories and budgets.

DESIGN DECISION: All records are frozen Pydantic models.
A record is a value - nothing mutates it after construction. Updates
produce a new record (see `model_copy(update=...)`).

DESIGN DECISION: Amounts are never negative.
The direction of money is carried by `TransactionType`, not by a sign.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


CATEGORY_NAME_MAX_LENGTH = 50


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money for a transaction (and the intended use of a category)."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class BudgetPeriod(str, Enum):
    """
    How often a budget resets.

    The calculation layer does not use this itself. The caller scopes
    transactions to the period before asking for budget statistics.
    """
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


# =============================================================================
# CORE RECORDS
# =============================================================================

class Category(BaseModel):
    """
    A user-defined category.

    A category's type says which transactions should reference it.
    Whether that is enforced is a validator setting, not a model rule.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique category ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=CATEGORY_NAME_MAX_LENGTH,
        description="Display name (trimmed)"
    )
    type: TransactionType = Field(
        ...,
        description="Which transaction type this category is meant for"
    )
    icon: Optional[str] = None
    color: Optional[str] = Field(
        default=None,
        description="Hex color used by charts, e.g. #10B981"
    )
    user_id: Optional[str] = None


class Transaction(BaseModel):
    """
    A single income or expense record.

    `category` is an optional display snapshot of the referenced category.
    Category aggregation only counts transactions where it is populated.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique transaction ID"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Non-negative amount; direction is given by `type`"
    )
    type: TransactionType
    date: datetime = Field(
        ...,
        description="When the transaction happened"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=500,
    )
    user_id: Optional[str] = None
    category_id: Optional[str] = Field(
        default=None,
        description="Referenced category ID, None when uncategorized"
    )
    category: Optional[Category] = Field(
        default=None,
        description="Embedded category snapshot for display"
    )


class Budget(BaseModel):
    """
    A spending limit for a single category.

    The optional start/end dates bound the budget's lifetime. They are
    applied by the reporting layer, never by the budget calculations.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique budget ID"
    )
    category_id: str = Field(
        ...,
        description="The one category this budget covers"
    )
    limit: Decimal = Field(
        ...,
        ge=0,
        description="Spending limit for one period"
    )
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    user_id: Optional[str] = None
    category: Optional[Category] = None

    @model_validator(mode='after')
    def validate_dates(self) -> 'Budget':
        """Validate the budget window."""
        if self.start_date and self.end_date:
            if self.start_date > self.end_date:
                raise ValueError("Budget start date cannot be after end date")
        return self
