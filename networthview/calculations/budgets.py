"""
Budget Calculations

Progress, overage and remaining-budget arithmetic for budgets, plus
classification of budgets into "over" and "at risk".

DESIGN DECISION: These functions never look at dates.
`calculate_budget_stats` uses every transaction it is given. The caller
must pass transactions already scoped to the budget's period
(see `networthview.reports.budget_period_window`).

Boundaries:
- exactly at the limit is NOT over budget (`spent > limit` is strict)
- exactly at the limit IS at risk (the at-risk band is closed)
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from networthview.calculations.transactions import Number, as_decimal
from networthview.models.finance import Budget, Transaction, TransactionType
from networthview.models.summaries import BudgetStats


AT_RISK_LOWER_PERCENT = 80
AT_RISK_UPPER_PERCENT = 100


def calculate_budget_progress(spent: Number, limit: Number) -> float:
    """
    Percentage of the limit already spent.

    Uncapped (can exceed 100). Returns 0 for a zero limit.

    Example:
        >>> calculate_budget_progress(450, 500)
        90.0
    """
    spent, limit = as_decimal(spent), as_decimal(limit)
    if limit == 0:
        return 0.0
    return float(spent / limit * 100)


def calculate_remaining_budget(spent: Number, limit: Number) -> Decimal:
    """Limit minus spent; negative when over budget."""
    return as_decimal(limit) - as_decimal(spent)


def is_over_budget(spent: Number, limit: Number) -> bool:
    return as_decimal(spent) > as_decimal(limit)


def calculate_budget_overage(spent: Number, limit: Number) -> Decimal:
    """How far spending went past the limit (0 when within it)."""
    return max(Decimal(0), as_decimal(spent) - as_decimal(limit))


def calculate_spent_in_category(
    transactions: Iterable[Transaction],
    category_id: str,
) -> Decimal:
    """
    Total expense amount for a category.

    Income transactions in the category are never counted as spent.
    """
    return sum(
        (
            t.amount
            for t in transactions
            if t.category_id == category_id and t.type == TransactionType.EXPENSE
        ),
        Decimal(0),
    )


def calculate_budget_stats(
    budget: Budget,
    transactions: Iterable[Transaction],
) -> BudgetStats:
    """Spent, remaining, percentage, over-budget flag and overage for one budget."""
    spent = calculate_spent_in_category(transactions, budget.category_id)
    return BudgetStats(
        spent=spent,
        remaining=calculate_remaining_budget(spent, budget.limit),
        percentage=calculate_budget_progress(spent, budget.limit),
        is_over_budget=is_over_budget(spent, budget.limit),
        overage=calculate_budget_overage(spent, budget.limit),
    )


def get_over_budgets(
    budgets: Iterable[Budget],
    transactions: Sequence[Transaction],
) -> list[Budget]:
    """
    Budgets whose spending exceeds their limit.

    Each budget is scored on its own category only, so budgets sharing
    the same transaction list do not affect each other.
    """
    return [
        budget
        for budget in budgets
        if calculate_budget_stats(budget, transactions).is_over_budget
    ]


def get_at_risk_budgets(
    budgets: Iterable[Budget],
    transactions: Sequence[Transaction],
    lower: float = AT_RISK_LOWER_PERCENT,
    upper: float = AT_RISK_UPPER_PERCENT,
) -> list[Budget]:
    """Budgets whose progress is within [lower, upper] percent, both inclusive."""
    return [
        budget
        for budget in budgets
        if lower <= calculate_budget_stats(budget, transactions).percentage <= upper
    ]


def calculate_budget_proportion_remaining(spent: Number, limit: Number) -> float:
    """
    Share of the limit still available, between 0 and 1.

    Example:
        >>> calculate_budget_proportion_remaining(250, 500)
        0.5
    """
    spent, limit = as_decimal(spent), as_decimal(limit)
    if limit == 0:
        return 0.0
    remaining = calculate_remaining_budget(spent, limit)
    return float(max(0, remaining / limit))
