"""Dashboard reporting package."""

from networthview.reports.dashboard import (
    CHART_PALETTE,
    DashboardService,
    active_budget_window,
    budget_period_window,
)

__all__ = [
    "CHART_PALETTE",
    "DashboardService",
    "active_budget_window",
    "budget_period_window",
]
