"""
Calculation Package

Pure, stateless arithmetic over in-memory transactions, categories and
budgets. This package imports nothing from storage, configuration or
logging and never raises for well-typed input.
"""

from networthview.calculations.transactions import (
    as_decimal,
    calculate_net_balance,
    calculate_percentage_change,
    calculate_total_expenses,
    calculate_total_income,
    count_by_type,
    filter_by_category,
    filter_by_date_range,
    filter_by_type,
    group_by_month,
    month_bounds,
    month_key,
    transactions_for_last_months,
    transactions_for_month,
)
from networthview.calculations.categories import (
    aggregate_by_category,
    aggregate_expenses_by_category,
    aggregate_income_by_category,
    calculate_category_diversity,
    calculate_uncategorized_stats,
    get_top_categories,
    get_uncategorized_transactions,
)
from networthview.calculations.budgets import (
    calculate_budget_overage,
    calculate_budget_progress,
    calculate_budget_proportion_remaining,
    calculate_budget_stats,
    calculate_remaining_budget,
    calculate_spent_in_category,
    get_at_risk_budgets,
    get_over_budgets,
    is_over_budget,
)

__all__ = [
    # Transactions
    "as_decimal",
    "calculate_net_balance",
    "calculate_percentage_change",
    "calculate_total_expenses",
    "calculate_total_income",
    "count_by_type",
    "filter_by_category",
    "filter_by_date_range",
    "filter_by_type",
    "group_by_month",
    "month_bounds",
    "month_key",
    "transactions_for_last_months",
    "transactions_for_month",
    # Categories
    "aggregate_by_category",
    "aggregate_expenses_by_category",
    "aggregate_income_by_category",
    "calculate_category_diversity",
    "calculate_uncategorized_stats",
    "get_top_categories",
    "get_uncategorized_transactions",
    # Budgets
    "calculate_budget_overage",
    "calculate_budget_progress",
    "calculate_budget_proportion_remaining",
    "calculate_budget_stats",
    "calculate_remaining_budget",
    "calculate_spent_in_category",
    "get_at_risk_budgets",
    "get_over_budgets",
    "is_over_budget",
]
