"""
Tests for boundary validation.
"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from tests.factories import FOOD, SALARY
from networthview.audit import AuditLogger
from networthview.config import AppSettings
from networthview.models import (
    AuditEventType,
    BudgetInput,
    BudgetPeriod,
    CategoryInput,
    TransactionInput,
    TransactionType,
)
from networthview.services import InMemoryFinanceStorage
from networthview.validation import (
    CategoryTypeMismatch,
    InputValidator,
    InvalidAmount,
    InvalidCategoryName,
    InvalidDateRange,
    UnknownCategory,
    sanitize_string,
    to_decimal,
    validate_amount,
    validate_date_not_future,
    validate_date_range,
    validate_non_empty,
)


NOW = datetime(2024, 1, 31, 12, 0)


@pytest.fixture
def events():
    return []


@pytest.fixture
def validator(settings, events):
    return InputValidator(
        settings=settings,
        audit_logger=AuditLogger(sink=events.append),
    )


@pytest.fixture
def strict_validator(events):
    strict = AppSettings(_env_file=None, log_json=False, enforce_category_type_match=True)
    return InputValidator(settings=strict, audit_logger=AuditLogger(sink=events.append))


def expense(amount=50, **kwargs) -> TransactionInput:
    kwargs.setdefault("date", datetime(2024, 1, 15))
    return TransactionInput(amount=amount, type=TransactionType.EXPENSE, **kwargs)


class TestPrimitiveChecks:
    """Tests for the standalone check functions."""

    @pytest.mark.parametrize("amount", [0, 100, 0.5, Decimal("12.34")])
    def test_valid_amounts(self, amount):
        assert validate_amount(amount) is True

    @pytest.mark.parametrize(
        "amount",
        [-1, -0.01, float("nan"), float("inf"), Decimal("NaN"), Decimal("Infinity"),
         "100", None, True],
    )
    def test_invalid_amounts(self, amount):
        assert validate_amount(amount) is False

    def test_date_not_future(self):
        assert validate_date_not_future(NOW, now=NOW) is True
        assert validate_date_not_future(NOW + timedelta(seconds=1), now=NOW) is False

    def test_date_not_future_tolerance(self):
        tomorrow = NOW + timedelta(hours=20)
        assert validate_date_not_future(tomorrow, now=NOW, tolerance_days=1) is True

    def test_date_range(self):
        assert validate_date_range(datetime(2024, 1, 1), datetime(2024, 1, 1)) is True
        assert validate_date_range(datetime(2024, 1, 2), datetime(2024, 1, 1)) is False

    def test_strings(self):
        assert sanitize_string("  Food ") == "Food"
        assert validate_non_empty("   ") is False
        assert validate_non_empty(" a ") is True

    def test_to_decimal_avoids_float_noise(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(5) == Decimal("5")


class TestTransactionValidation:
    """Tests for validate_transaction / build_transaction."""

    def test_valid_transaction(self, validator):
        result = validator.validate_transaction(expense(), now=NOW)
        assert result.is_valid
        assert result.issues == []

    @pytest.mark.parametrize("amount", [-50, float("nan"), float("inf"), "abc"])
    def test_rejects_bad_amount(self, validator, amount):
        result = validator.validate_transaction(expense(amount), now=NOW)
        assert [i.issue_type for i in result.issues] == ["invalid_amount"]

    def test_rejects_future_date(self, validator):
        result = validator.validate_transaction(expense(date=NOW + timedelta(days=1)), now=NOW)
        assert result.has_errors
        assert result.issues[0].field == "date"

    def test_reports_every_issue(self, validator):
        result = validator.validate_transaction(
            expense(-1, date=NOW + timedelta(days=3)), now=NOW
        )
        assert result.error_count == 2

    def test_unknown_category(self, validator):
        result = validator.validate_transaction(
            expense(category_id="nope"), categories=[FOOD], now=NOW
        )
        assert result.issues[0].issue_type == "unknown_category"

    def test_category_skipped_without_lookup(self, validator):
        result = validator.validate_transaction(expense(category_id="nope"), now=NOW)
        assert result.is_valid

    def test_type_mismatch_is_warning_by_default(self, validator):
        result = validator.validate_transaction(
            expense(category_id=SALARY.id), categories=[SALARY], now=NOW
        )
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_type_mismatch_enforced(self, strict_validator):
        with pytest.raises(CategoryTypeMismatch):
            strict_validator.build_transaction(
                expense(category_id=SALARY.id), "user1", categories=[SALARY], now=NOW
            )

    def test_build_transaction(self, validator, events):
        tx = validator.build_transaction(
            expense(12.5, category_id=FOOD.id, note=" lunch "),
            "user1",
            categories=[FOOD],
            now=NOW,
        )
        assert tx.amount == Decimal("12.5")
        assert tx.user_id == "user1"
        assert tx.note == "lunch"
        assert tx.category == FOOD
        assert tx.id
        assert [e.event_type for e in events] == [AuditEventType.TRANSACTION_ACCEPTED]

    def test_build_transaction_raises_and_audits(self, validator, events):
        with pytest.raises(InvalidAmount) as exc_info:
            validator.build_transaction(expense(-5), "user1", now=NOW)
        assert exc_info.value.field == "amount"
        assert [e.event_type for e in events] == [AuditEventType.VALIDATION_FAILED]

    def test_build_transaction_future_date(self, validator):
        with pytest.raises(InvalidDateRange):
            validator.build_transaction(
                expense(date=NOW + timedelta(days=1)), "user1", now=NOW
            )

    def test_resolves_category_from_storage(self, settings, events):
        storage = InMemoryFinanceStorage()
        storage.save_category(FOOD)
        validator = InputValidator(
            storage=storage, settings=settings, audit_logger=AuditLogger(sink=events.append)
        )

        tx = validator.build_transaction(expense(category_id="cat1"), "user1", now=NOW)
        assert tx.category.name == "Food"

        with pytest.raises(UnknownCategory):
            validator.build_transaction(expense(category_id="cat1"), "user2", now=NOW)


class TestCategoryValidation:
    """Tests for category name rules."""

    def test_build_category(self, validator):
        category = validator.build_category(
            CategoryInput(name="  Rent  ", type=TransactionType.EXPENSE), "user1"
        )
        assert category.name == "Rent"
        assert category.user_id == "user1"

    def test_empty_name(self, validator):
        with pytest.raises(InvalidCategoryName, match="required"):
            validator.build_category(
                CategoryInput(name="   ", type=TransactionType.EXPENSE), "user1"
            )

    def test_name_too_long(self, validator):
        result = validator.validate_category(
            CategoryInput(name="x" * 51, type=TransactionType.EXPENSE)
        )
        assert result.issues[0].issue_type == "invalid_name"

    def test_name_at_limit(self, validator):
        result = validator.validate_category(
            CategoryInput(name="x" * 50, type=TransactionType.EXPENSE)
        )
        assert result.is_valid


class TestBudgetValidation:
    """Tests for budget inputs."""

    def test_build_budget(self, validator, events):
        budget = validator.build_budget(
            BudgetInput(category_id="cat1", limit=500, period=BudgetPeriod.WEEKLY),
            "user1",
            categories=[FOOD],
        )
        assert budget.limit == Decimal("500")
        assert budget.period == BudgetPeriod.WEEKLY
        assert events[-1].event_type == AuditEventType.BUDGET_ACCEPTED

    def test_negative_limit(self, validator):
        with pytest.raises(InvalidAmount) as exc_info:
            validator.build_budget(BudgetInput(category_id="cat1", limit=-1), "user1")
        assert exc_info.value.field == "limit"

    def test_inverted_dates(self, validator):
        with pytest.raises(InvalidDateRange):
            validator.build_budget(
                BudgetInput(
                    category_id="cat1",
                    limit=100,
                    start_date=datetime(2024, 2, 1),
                    end_date=datetime(2024, 1, 1),
                ),
                "user1",
            )

    def test_unknown_category(self, validator):
        with pytest.raises(UnknownCategory):
            validator.build_budget(
                BudgetInput(category_id="missing", limit=100), "user1", categories=[FOOD]
            )
