"""
Write-side Input Models

These are what a caller submits when creating records.

DESIGN DECISION: Inputs are only structurally typed here.
Semantic rules (negative amounts, future dates, unknown categories,
name length) are checked by `networthview.validation.InputValidator`
so that every problem is reported with a clear message instead of a
generic schema error.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from networthview.models.finance import BudgetPeriod, TransactionType


class TransactionInput(BaseModel):
    """A transaction as submitted by the user."""
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Any = Field(
        ...,
        description="Raw amount, checked by the validator"
    )
    type: TransactionType
    date: datetime
    note: Optional[str] = None
    category_id: Optional[str] = None


class CategoryInput(BaseModel):
    """A category as submitted by the user."""

    name: str
    type: TransactionType
    icon: Optional[str] = None
    color: Optional[str] = None


class BudgetInput(BaseModel):
    """A budget as submitted by the user."""

    category_id: str
    limit: Any = Field(
        ...,
        description="Raw limit, checked by the validator"
    )
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
