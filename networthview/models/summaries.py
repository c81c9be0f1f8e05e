"""
Derived Summary Models

Everything in this module is computed, never stored.
Each call to a calculation or report function builds fresh instances.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from networthview.models.finance import Budget


# =============================================================================
# CALCULATION RESULTS
# =============================================================================

class CategorySummary(BaseModel):
    """Aggregated amount and share of one category."""
    model_config = ConfigDict(frozen=True)

    category_id: str
    category_name: str
    amount: Decimal
    percentage: float = Field(
        ...,
        description="Share of the aggregated total, 0-100"
    )
    transaction_count: int = Field(ge=0)


class BudgetStats(BaseModel):
    """
    Spending state of a single budget.

    `percentage` is uncapped and `remaining` may be negative.
    """
    model_config = ConfigDict(frozen=True)

    spent: Decimal
    remaining: Decimal
    percentage: float
    is_over_budget: bool
    overage: Decimal


class UncategorizedStats(BaseModel):
    """How many transactions carry no category, and their share of the count."""
    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    percentage: float


# =============================================================================
# DASHBOARD REPORT MODELS
# =============================================================================

class DashboardSummary(BaseModel):
    """
    Headline numbers for one month.

    `income_change` and `expense_change` compare against the previous
    calendar month using the zero-base policy of `calculate_percentage_change`.
    """
    model_config = ConfigDict(frozen=True)

    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    transaction_count: int = Field(ge=0)
    period_start: datetime
    period_end: datetime
    income_change: float = 0.0
    expense_change: float = 0.0


class TimeSeriesDataPoint(BaseModel):
    """Income vs expenses for one calendar month ("YYYY-MM")."""
    model_config = ConfigDict(frozen=True)

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
    )
    income: Decimal
    expenses: Decimal
    balance: Decimal


class PieChartDataPoint(BaseModel):
    """A slice of the expense breakdown chart."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: Decimal
    percentage: float
    color: str


class BudgetProgressData(BaseModel):
    """Budget progress as shown on the dashboard."""
    model_config = ConfigDict(frozen=True)

    budget_id: str
    category_id: str
    category_name: str
    spent: Decimal
    limit: Decimal
    remaining: Decimal
    percentage: float
    is_over_budget: bool
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None


class BudgetAlerts(BaseModel):
    """Budgets that need the user's attention."""
    model_config = ConfigDict(frozen=True)

    over: list[Budget] = Field(default_factory=list)
    at_risk: list[Budget] = Field(default_factory=list)

    @property
    def has_alerts(self) -> bool:
        return bool(self.over or self.at_risk)


class CategoryOverview(BaseModel):
    """Category usage over a rolling window of months."""
    model_config = ConfigDict(frozen=True)

    top_expense_categories: list[CategorySummary] = Field(default_factory=list)
    income_categories: list[CategorySummary] = Field(default_factory=list)
    diversity: int = Field(ge=0)
    uncategorized: UncategorizedStats
