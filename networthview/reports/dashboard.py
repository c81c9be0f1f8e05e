"""
Dashboard Reports

DESIGN DECISION: This is the layer that scopes data.
The calculation package assumes it receives the right transactions.
This service fetches one user's records from storage, cuts them to the
right time window (calendar month, budget period, rolling window) and
only then hands them to the calculations.

Every report is recomputed on each call. Nothing is cached.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Optional, TypeVar

from dateutil.relativedelta import relativedelta

from networthview.audit import AuditLogger, get_logger
from networthview.calculations import (
    aggregate_expenses_by_category,
    aggregate_income_by_category,
    calculate_budget_stats,
    calculate_category_diversity,
    calculate_net_balance,
    calculate_percentage_change,
    calculate_total_expenses,
    calculate_total_income,
    calculate_uncategorized_stats,
    get_at_risk_budgets,
    get_over_budgets,
    get_top_categories,
    group_by_month,
    month_bounds,
    month_key,
    transactions_for_last_months,
    transactions_for_month,
)
from networthview.config import AppSettings, get_settings
from networthview.models.finance import Budget, BudgetPeriod, Transaction
from networthview.models.summaries import (
    BudgetAlerts,
    BudgetProgressData,
    CategoryOverview,
    DashboardSummary,
    PieChartDataPoint,
    TimeSeriesDataPoint,
)
from networthview.services.storage import FinanceStorageInterface, StorageError


T = TypeVar("T")

# Used for categories without their own color
CHART_PALETTE = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
)

_END_OF_DAY = timedelta(days=1) - timedelta(microseconds=1)


def budget_period_window(
    period: BudgetPeriod,
    reference: datetime,
) -> tuple[datetime, datetime]:
    """
    First and last instant of the budget period containing `reference`.

    Weeks start on Monday.
    """
    day_start = reference.replace(hour=0, minute=0, second=0, microsecond=0)

    if period == BudgetPeriod.DAILY:
        return day_start, day_start + _END_OF_DAY
    if period == BudgetPeriod.WEEKLY:
        week_start = day_start - timedelta(days=day_start.weekday())
        return week_start, week_start + timedelta(days=6) + _END_OF_DAY
    if period == BudgetPeriod.YEARLY:
        year_start = day_start.replace(month=1, day=1)
        return year_start, year_start + relativedelta(years=1) - timedelta(microseconds=1)
    return month_bounds(reference)


def active_budget_window(
    budget: Budget,
    reference: datetime,
) -> Optional[tuple[datetime, datetime]]:
    """
    The budget's period window clipped to its own start/end dates.

    Returns None when the budget is not active at `reference`.
    """
    start, end = budget_period_window(budget.period, reference)
    if budget.start_date and budget.start_date > start:
        start = budget.start_date
    if budget.end_date and budget.end_date < end:
        end = budget.end_date
    if start > end:
        return None
    return start, end


class DashboardService:
    """
    Builds the dashboard's summaries, charts and budget alerts.

    GUARANTEES:
    - Only reads; never writes to storage
    - Every number comes from the calculation package
    - Budgets are always scored on their own period's transactions
    """

    def __init__(
        self,
        storage: FinanceStorageInterface,
        settings: Optional[AppSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._settings = settings or get_settings()
        self._audit = audit_logger or AuditLogger()
        self._logger = get_logger("networthview.reports")

    def _fetch(self, operation: str, user_id: str, read: Callable[[], T]) -> T:
        """Run a storage read, auditing failures before re-raising."""
        try:
            return read()
        except StorageError as e:
            self._audit.log_storage_error(operation, str(e), user_id)
            raise

    def _transactions(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        category_id: Optional[str] = None,
    ) -> list[Transaction]:
        return self._fetch(
            "list_transactions",
            user_id,
            lambda: self._storage.list_transactions(
                user_id, date_from=start, date_to=end, category_id=category_id
            ),
        )

    def _active_budgets(
        self,
        user_id: str,
        reference: datetime,
    ) -> list[tuple[Budget, tuple[datetime, datetime], list[Transaction]]]:
        """Active budgets with their window and period-scoped transactions."""
        budgets = self._fetch(
            "list_budgets", user_id, lambda: self._storage.list_budgets(user_id)
        )
        scoped = []
        for budget in budgets:
            window = active_budget_window(budget, reference)
            if window is None:
                self._logger.debug("budget_inactive", budget_id=budget.id)
                continue
            transactions = self._transactions(user_id, *window, category_id=budget.category_id)
            scoped.append((budget, window, transactions))
        return scoped

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def summary(
        self,
        user_id: str,
        reference: Optional[datetime] = None,
    ) -> DashboardSummary:
        """
        Income, expenses and balance for the reference month.

        Also compares income and expenses against the previous month.
        """
        reference = reference or datetime.now()
        start, end = month_bounds(reference)
        previous_start, _ = month_bounds(start - timedelta(days=1))

        transactions = self._transactions(user_id, previous_start, end)
        current = transactions_for_month(transactions, reference)
        previous = transactions_for_month(transactions, previous_start)

        income = calculate_total_income(current)
        expenses = calculate_total_expenses(current)

        summary = DashboardSummary(
            total_income=income,
            total_expenses=expenses,
            net_balance=calculate_net_balance(current),
            transaction_count=len(current),
            period_start=start,
            period_end=end,
            income_change=calculate_percentage_change(
                calculate_total_income(previous), income
            ),
            expense_change=calculate_percentage_change(
                calculate_total_expenses(previous), expenses
            ),
        )
        self._audit.log_report_generated(
            "summary", user_id, {"month": month_key(reference)}
        )
        return summary

    def time_series(
        self,
        user_id: str,
        months: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[TimeSeriesDataPoint]:
        """
        One data point per calendar month, oldest first.

        Months without transactions are included with zeros.
        """
        months = months or self._settings.time_series_months
        now = now or datetime.now()
        first_month, _ = month_bounds(now - relativedelta(months=months - 1))
        _, last_instant = month_bounds(now)

        groups = group_by_month(self._transactions(user_id, first_month, last_instant))

        points = []
        for offset in range(months):
            key = month_key(first_month + relativedelta(months=offset))
            bucket = groups.get(key, [])
            points.append(TimeSeriesDataPoint(
                month=key,
                income=calculate_total_income(bucket),
                expenses=calculate_total_expenses(bucket),
                balance=calculate_net_balance(bucket),
            ))

        self._audit.log_report_generated("time_series", user_id, {"months": months})
        return points

    def category_breakdown(
        self,
        user_id: str,
        reference: Optional[datetime] = None,
    ) -> list[PieChartDataPoint]:
        """Expense share per category for the reference month."""
        reference = reference or datetime.now()
        start, end = month_bounds(reference)
        summaries = aggregate_expenses_by_category(self._transactions(user_id, start, end))
        categories = {
            c.id: c
            for c in self._fetch(
                "list_categories", user_id, lambda: self._storage.list_categories(user_id)
            )
        }

        points = []
        for index, summary in enumerate(summaries):
            category = categories.get(summary.category_id)
            color = category.color if category and category.color else None
            points.append(PieChartDataPoint(
                name=summary.category_name,
                value=summary.amount,
                percentage=round(summary.percentage, 1),
                color=color or CHART_PALETTE[index % len(CHART_PALETTE)],
            ))

        self._audit.log_report_generated(
            "category_breakdown", user_id, {"categories": len(points)}
        )
        return points

    def category_overview(
        self,
        user_id: str,
        months: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> CategoryOverview:
        """Top categories, diversity and uncategorized share over the last N months."""
        months = months or self._settings.time_series_months
        now = now or datetime.now()
        transactions = transactions_for_last_months(
            self._transactions(user_id, now - relativedelta(months=months), now),
            months,
            now=now,
        )
        overview = CategoryOverview(
            top_expense_categories=get_top_categories(
                transactions, self._settings.top_categories_limit
            ),
            income_categories=aggregate_income_by_category(transactions),
            diversity=calculate_category_diversity(transactions),
            uncategorized=calculate_uncategorized_stats(transactions),
        )
        self._audit.log_report_generated(
            "category_overview", user_id, {"months": months}
        )
        return overview

    def budget_progress(
        self,
        user_id: str,
        reference: Optional[datetime] = None,
    ) -> list[BudgetProgressData]:
        """Progress of every budget active at `reference`."""
        reference = reference or datetime.now()
        categories = {
            c.id: c
            for c in self._fetch(
                "list_categories", user_id, lambda: self._storage.list_categories(user_id)
            )
        }

        progress = []
        for budget, (start, end), transactions in self._active_budgets(user_id, reference):
            stats = calculate_budget_stats(budget, transactions)
            category = categories.get(budget.category_id)
            progress.append(BudgetProgressData(
                budget_id=budget.id,
                category_id=budget.category_id,
                category_name=category.name if category else "Unknown",
                spent=stats.spent,
                limit=budget.limit,
                remaining=stats.remaining,
                percentage=stats.percentage,
                is_over_budget=stats.is_over_budget,
                period_start=start,
                period_end=end,
            ))

        self._audit.log_report_generated(
            "budget_progress", user_id, {"budgets": len(progress)}
        )
        return progress

    def budget_alerts(
        self,
        user_id: str,
        reference: Optional[datetime] = None,
    ) -> BudgetAlerts:
        """
        Over-limit and at-risk budgets.

        At risk means progress within [threshold, 100] percent.
        """
        reference = reference or datetime.now()
        threshold = self._settings.at_risk_threshold_percent

        over, at_risk = [], []
        for budget, _, transactions in self._active_budgets(user_id, reference):
            if get_over_budgets([budget], transactions):
                over.append(budget)
                stats = calculate_budget_stats(budget, transactions)
                self._audit.log_budget_over_limit(
                    user_id, budget.id, str(stats.spent), str(budget.limit)
                )
            elif get_at_risk_budgets([budget], transactions, lower=threshold):
                at_risk.append(budget)
                stats = calculate_budget_stats(budget, transactions)
                self._audit.log_budget_at_risk(user_id, budget.id, stats.percentage)

        self._logger.info(
            "budget_alerts_computed",
            user_id=user_id,
            over=len(over),
            at_risk=len(at_risk),
        )
        return BudgetAlerts(over=over, at_risk=at_risk)
