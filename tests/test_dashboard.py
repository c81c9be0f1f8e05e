"""
Tests for the dashboard report service.
"""

import pytest
from datetime import datetime
from decimal import Decimal

from tests.factories import FOOD, SALARY, TRANSPORT, make_budget, make_transaction
from networthview.audit import AuditLogger
from networthview.models import (
    AuditEventType,
    BudgetPeriod,
    TransactionType,
)
from networthview.reports import (
    CHART_PALETTE,
    DashboardService,
    active_budget_window,
    budget_period_window,
)
from networthview.services import InMemoryFinanceStorage, StorageError


INCOME = TransactionType.INCOME


@pytest.fixture
def storage():
    store = InMemoryFinanceStorage()
    for category in (FOOD, TRANSPORT, SALARY):
        store.save_category(category)
    return store


@pytest.fixture
def events():
    return []


@pytest.fixture
def service(storage, settings, events):
    return DashboardService(storage, settings=settings, audit_logger=AuditLogger(sink=events.append))


def add(storage, *transactions):
    for tx in transactions:
        storage.save_transaction(tx)


class TestBudgetWindows:
    """Tests for budget period windows."""

    REFERENCE = datetime(2024, 1, 17, 15, 30)  # a Wednesday

    def test_daily(self):
        start, end = budget_period_window(BudgetPeriod.DAILY, self.REFERENCE)
        assert start == datetime(2024, 1, 17)
        assert end == datetime(2024, 1, 17, 23, 59, 59, 999999)

    def test_weekly_starts_monday(self):
        start, end = budget_period_window(BudgetPeriod.WEEKLY, self.REFERENCE)
        assert start == datetime(2024, 1, 15)
        assert end == datetime(2024, 1, 21, 23, 59, 59, 999999)

    def test_monthly(self):
        start, end = budget_period_window(BudgetPeriod.MONTHLY, self.REFERENCE)
        assert start == datetime(2024, 1, 1)
        assert end == datetime(2024, 1, 31, 23, 59, 59, 999999)

    def test_yearly(self):
        start, end = budget_period_window(BudgetPeriod.YEARLY, self.REFERENCE)
        assert start == datetime(2024, 1, 1)
        assert end == datetime(2024, 12, 31, 23, 59, 59, 999999)

    def test_clipped_to_budget_dates(self):
        budget = make_budget(100, start_date=datetime(2024, 1, 10))
        start, _ = active_budget_window(budget, self.REFERENCE)
        assert start == datetime(2024, 1, 10)

    def test_inactive_budget(self):
        budget = make_budget(100, end_date=datetime(2023, 12, 31))
        assert active_budget_window(budget, self.REFERENCE) is None


class TestSummary:
    """Tests for the monthly summary."""

    def test_month_totals_and_changes(self, service, storage, events):
        add(
            storage,
            make_transaction(1000, INCOME, date=datetime(2024, 1, 1)),
            make_transaction(200, date=datetime(2024, 1, 10)),
            make_transaction(1500, INCOME, date=datetime(2024, 2, 1)),
            make_transaction(100, date=datetime(2024, 2, 29, 23, 0)),
            make_transaction(999, date=datetime(2024, 3, 1)),
        )
        summary = service.summary("user1", datetime(2024, 2, 15))

        assert summary.total_income == Decimal("1500")
        assert summary.total_expenses == Decimal("100")
        assert summary.net_balance == Decimal("1400")
        assert summary.transaction_count == 2
        assert summary.period_start == datetime(2024, 2, 1)
        assert summary.income_change == 50
        assert summary.expense_change == -50
        assert events[-1].event_type == AuditEventType.REPORT_GENERATED

    def test_empty_previous_month(self, service, storage):
        add(storage, make_transaction(100, date=datetime(2024, 2, 3)))
        summary = service.summary("user1", datetime(2024, 2, 15))
        assert summary.expense_change == 100
        assert summary.income_change == 0

    def test_other_users_ignored(self, service, storage):
        add(storage, make_transaction(100, date=datetime(2024, 2, 3), user_id="user2"))
        assert service.summary("user1", datetime(2024, 2, 15)).transaction_count == 0


class TestTimeSeries:
    """Tests for the monthly time series."""

    def test_zero_filled_oldest_first(self, service, storage):
        add(
            storage,
            make_transaction(500, INCOME, date=datetime(2024, 1, 5)),
            make_transaction(80, date=datetime(2024, 3, 2)),
            make_transaction(70, date=datetime(2023, 12, 31)),
        )
        points = service.time_series("user1", months=3, now=datetime(2024, 3, 15))

        assert [p.month for p in points] == ["2024-01", "2024-02", "2024-03"]
        assert points[0].balance == Decimal("500")
        assert points[1].income == 0 and points[1].expenses == 0
        assert points[2].balance == Decimal("-80")

    def test_default_window_from_settings(self, service):
        points = service.time_series("user1", now=datetime(2024, 6, 1))
        assert len(points) == 6
        assert points[0].month == "2024-01"


class TestCategoryReports:
    """Tests for the expense breakdown and category overview."""

    def test_breakdown(self, service, storage):
        storage.save_category(TRANSPORT.model_copy(update={"color": "#123456"}))
        add(
            storage,
            make_transaction(300, category=FOOD, date=datetime(2024, 1, 3)),
            make_transaction(100, category=TRANSPORT, date=datetime(2024, 1, 4)),
            make_transaction(50, date=datetime(2024, 1, 5)),
            make_transaction(900, INCOME, category=SALARY, date=datetime(2024, 1, 6)),
        )
        points = service.category_breakdown("user1", datetime(2024, 1, 20))

        assert [p.name for p in points] == ["Food", "Transport"]
        assert points[0].color == CHART_PALETTE[0]
        assert points[1].color == "#123456"
        # Uncategorized spend still counts toward the base
        assert points[0].percentage == pytest.approx(66.7)
        assert points[1].percentage == pytest.approx(22.2)

    def test_overview(self, service, storage):
        add(
            storage,
            make_transaction(300, category=FOOD, date=datetime(2024, 5, 3)),
            make_transaction(100, category=TRANSPORT, date=datetime(2024, 5, 4)),
            make_transaction(2000, INCOME, category=SALARY, date=datetime(2024, 5, 1)),
            make_transaction(50, date=datetime(2024, 5, 5)),
            make_transaction(40, category=FOOD, date=datetime(2023, 1, 1)),
        )
        overview = service.category_overview("user1", months=3, now=datetime(2024, 6, 1))

        assert [s.category_name for s in overview.top_expense_categories] == ["Food", "Transport"]
        assert [s.category_name for s in overview.income_categories] == ["Salary"]
        assert overview.diversity == 3
        assert overview.uncategorized.count == 1
        assert overview.uncategorized.percentage == 25


class TestReportAuditing:
    """Every report generation is audited."""

    @pytest.mark.parametrize(
        "report",
        ["summary", "time_series", "category_breakdown", "category_overview", "budget_progress"],
    )
    def test_report_generated_event(self, service, storage, events, report):
        storage.save_budget(make_budget(100))
        getattr(service, report)("user1")

        generated = [e for e in events if e.event_type == AuditEventType.REPORT_GENERATED]
        assert [e.entity_id for e in generated] == [report]
        assert generated[0].user_id == "user1"


class TestBudgetReports:
    """Tests for budget progress and alerts."""

    def test_progress_scoped_to_period(self, service, storage):
        storage.save_budget(make_budget(100, period=BudgetPeriod.WEEKLY))
        add(
            storage,
            make_transaction(40, category=FOOD, date=datetime(2024, 1, 14)),
            make_transaction(60, category=FOOD, date=datetime(2024, 1, 16)),
            make_transaction(5, category=TRANSPORT, date=datetime(2024, 1, 16)),
        )
        [progress] = service.budget_progress("user1", datetime(2024, 1, 17))

        assert progress.category_name == "Food"
        assert progress.spent == Decimal("60")
        assert progress.remaining == Decimal("40")
        assert progress.percentage == 60
        assert progress.period_start == datetime(2024, 1, 15)

    def test_progress_unknown_category(self, service, storage):
        storage.save_budget(make_budget(100, category_id="gone"))
        [progress] = service.budget_progress("user1", datetime(2024, 1, 17))
        assert progress.category_name == "Unknown"
        assert progress.spent == 0

    def test_inactive_budgets_omitted(self, service, storage):
        storage.save_budget(make_budget(100, end_date=datetime(2023, 12, 31)))
        assert service.budget_progress("user1", datetime(2024, 1, 17)) == []

    def test_alerts(self, service, storage, events):
        for limit in (500, 1000, 700):
            storage.save_budget(make_budget(limit, budget_id=f"b{limit}"))
        add(
            storage,
            make_transaction(250, category=FOOD, date=datetime(2024, 1, 15)),
            make_transaction(350, category=FOOD, date=datetime(2024, 1, 20)),
        )
        alerts = service.budget_alerts("user1", datetime(2024, 1, 25))

        assert [b.id for b in alerts.over] == ["b500"]
        assert [b.id for b in alerts.at_risk] == ["b700"]
        assert alerts.has_alerts
        types = [e.event_type for e in events]
        assert types.count(AuditEventType.BUDGET_OVER_LIMIT) == 1
        assert types.count(AuditEventType.BUDGET_AT_RISK) == 1

    def test_alerts_use_configured_threshold(self, storage, settings):
        strict = settings.model_copy(update={"at_risk_threshold_percent": 50.0})
        service = DashboardService(storage, settings=strict, audit_logger=AuditLogger())
        storage.save_budget(make_budget(1000))
        add(storage, make_transaction(600, category=FOOD, date=datetime(2024, 1, 15)))

        assert len(service.budget_alerts("user1", datetime(2024, 1, 25)).at_risk) == 1

    def test_no_alerts(self, service, storage):
        storage.save_budget(make_budget(1000))
        alerts = service.budget_alerts("user1", datetime(2024, 1, 25))
        assert not alerts.has_alerts


class FailingStorage(InMemoryFinanceStorage):
    def list_transactions(self, user_id, **kwargs):
        raise StorageError("database unavailable")


class TestStorageFailures:
    """Storage errors are audited and propagated."""

    def test_error_is_audited_and_reraised(self, settings, events):
        service = DashboardService(
            FailingStorage(), settings=settings, audit_logger=AuditLogger(sink=events.append)
        )
        with pytest.raises(StorageError, match="database unavailable"):
            service.summary("user1", datetime(2024, 1, 15))

        [event] = events
        assert event.event_type == AuditEventType.STORAGE_ERROR
        assert event.error_message == "database unavailable"

    def test_sink_failure_does_not_break_reports(self, storage, settings):
        def broken_sink(event):
            raise RuntimeError("sink down")

        service = DashboardService(
            storage, settings=settings, audit_logger=AuditLogger(sink=broken_sink)
        )
        assert service.summary("user1", datetime(2024, 1, 15)).transaction_count == 0
