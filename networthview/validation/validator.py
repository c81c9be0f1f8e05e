"""
Boundary Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Pydantic parses TransactionInput / CategoryInput / BudgetInput
- Types, enum membership and required fields
- Failures surface as pydantic.ValidationError

STAGE 2 - SEMANTIC VALIDATION (this module):
- Negative, NaN and infinite amounts
- Dates in the future, inverted date ranges
- Unknown categories, category/transaction type mismatches
- Category name rules

WHY HERE: the calculation package must stay total and side-effect free,
so garbage is stopped before a record is ever built.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them; `build_*` methods raise on the first error.
"""

import math
from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional, Union
from uuid import uuid4

from networthview.audit import AuditLogger
from networthview.config import AppSettings, get_settings
from networthview.models.finance import (
    CATEGORY_NAME_MAX_LENGTH,
    Budget,
    Category,
    Transaction,
)
from networthview.models.inputs import BudgetInput, CategoryInput, TransactionInput
from networthview.models.validation import ValidationIssue, ValidationResult
from networthview.services.storage import FinanceStorageInterface


# =============================================================================
# PRIMITIVE CHECKS
# =============================================================================

def validate_amount(amount: Any) -> bool:
    """
    Check an amount is a finite, non-negative number.

    Booleans and numeric strings are rejected.

    Example:
        >>> validate_amount(100)
        True
        >>> validate_amount(float("nan"))
        False
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return False
    if isinstance(amount, Decimal):
        if not amount.is_finite():
            return False
    elif isinstance(amount, float) and not math.isfinite(amount):
        return False
    return amount >= 0


def validate_date_not_future(
    value: datetime,
    now: Optional[datetime] = None,
    tolerance_days: int = 0,
) -> bool:
    """Check a date is not later than now (plus an optional tolerance)."""
    now = now or datetime.now(tz=value.tzinfo)
    return value <= now + timedelta(days=tolerance_days)


def validate_date_range(start: datetime, end: datetime) -> bool:
    return start <= end


def sanitize_string(value: str) -> str:
    return value.strip()


def validate_non_empty(value: str) -> bool:
    return len(sanitize_string(value)) > 0


def to_decimal(amount: Any) -> Decimal:
    """Convert an already validated amount to Decimal without float noise."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


# =============================================================================
# INPUT VALIDATOR
# =============================================================================

class InputValidator:
    """
    Validates user input before records are built or stored.

    Category references are resolved against an explicit `categories`
    list when given, otherwise against `storage`. With neither, the
    category checks are skipped.
    """

    def __init__(
        self,
        storage: Optional[FinanceStorageInterface] = None,
        settings: Optional[AppSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._settings = settings or get_settings()
        self._audit = audit_logger or AuditLogger()

    def _resolve_category(
        self,
        category_id: str,
        user_id: Optional[str],
        categories: Optional[Iterable[Category]],
    ) -> tuple[bool, Optional[Category]]:
        """Returns (checked, category)."""
        if categories is not None:
            return True, next((c for c in categories if c.id == category_id), None)
        if self._storage is not None and user_id:
            return True, self._storage.get_category(user_id, category_id)
        return False, None

    @staticmethod
    def _amount_issue(field: str, value: Any) -> Optional[ValidationIssue]:
        if validate_amount(value):
            return None
        return ValidationIssue(
            field=field,
            issue_type="invalid_amount",
            message=f"{field.capitalize()} must be a non-negative number, got {value!r}",
            severity="error",
            suggested_fix="Enter a positive amount; use the type to mark expenses",
        )

    def _category_issues(
        self,
        data: Union[TransactionInput, BudgetInput],
        user_id: Optional[str],
        categories: Optional[Iterable[Category]],
    ) -> list[ValidationIssue]:
        issues = []
        checked, category = self._resolve_category(data.category_id, user_id, categories)
        if checked and category is None:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="unknown_category",
                message=f"Category {data.category_id} does not exist",
                severity="error",
            ))
        elif (
            category is not None
            and isinstance(data, TransactionInput)
            and category.type != data.type
        ):
            # Advisory unless the setting turns it into a hard rule
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="category_type_mismatch",
                message=(
                    f"{data.type.value} transaction assigned to "
                    f"{category.type.value} category '{category.name}'"
                ),
                severity="error" if self._settings.enforce_category_type_match else "warning",
            ))
        return issues

    def validate_transaction(
        self,
        data: TransactionInput,
        user_id: Optional[str] = None,
        categories: Optional[Iterable[Category]] = None,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """
        Validate a transaction input.

        Args:
            data: Parsed transaction input
            user_id: Owner, used to resolve the category from storage
            categories: Explicit category list (takes precedence over storage)
            now: Reference time for the future-date check

        Returns:
            ValidationResult with all issues found
        """
        issues = []

        amount_issue = self._amount_issue("amount", data.amount)
        if amount_issue:
            issues.append(amount_issue)

        tolerance = self._settings.future_date_tolerance_days
        if not validate_date_not_future(data.date, now=now, tolerance_days=tolerance):
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message="Transaction date cannot be in the future",
                severity="error",
            ))

        if data.category_id:
            issues.extend(self._category_issues(data, user_id, categories))

        return ValidationResult(entity_type="transaction", issues=issues)

    def validate_category(self, data: CategoryInput) -> ValidationResult:
        """Validate a category input (name rules only)."""
        issues = []

        if not validate_non_empty(data.name):
            issues.append(ValidationIssue(
                field="name",
                issue_type="invalid_name",
                message="Category name is required",
                severity="error",
            ))
        elif len(sanitize_string(data.name)) > CATEGORY_NAME_MAX_LENGTH:
            issues.append(ValidationIssue(
                field="name",
                issue_type="invalid_name",
                message=f"Category name must be {CATEGORY_NAME_MAX_LENGTH} characters or less",
                severity="error",
                suggested_fix="Use a shorter name",
            ))

        return ValidationResult(entity_type="category", issues=issues)

    def validate_budget(
        self,
        data: BudgetInput,
        user_id: Optional[str] = None,
        categories: Optional[Iterable[Category]] = None,
    ) -> ValidationResult:
        """Validate a budget input."""
        issues = []

        amount_issue = self._amount_issue("limit", data.limit)
        if amount_issue:
            issues.append(amount_issue)

        if data.start_date and data.end_date and not validate_date_range(
            data.start_date, data.end_date
        ):
            issues.append(ValidationIssue(
                field="start_date",
                issue_type="invalid_date_range",
                message="Start date must be before end date",
                severity="error",
            ))

        issues.extend(self._category_issues(data, user_id, categories))

        return ValidationResult(entity_type="budget", issues=issues)

    def _check(self, result: ValidationResult, user_id: Optional[str]) -> None:
        if result.has_errors:
            self._audit.log_validation_failed(
                result.entity_type,
                user_id,
                [issue.model_dump() for issue in result.issues],
            )
        result.raise_for_errors()

    # -------------------------------------------------------------------------
    # Record builders
    # -------------------------------------------------------------------------

    def build_transaction(
        self,
        data: TransactionInput,
        user_id: str,
        transaction_id: Optional[str] = None,
        categories: Optional[Iterable[Category]] = None,
        now: Optional[datetime] = None,
    ) -> Transaction:
        """
        Validate input and build a Transaction with its category snapshot.

        Raises:
            InputValidationError: On the first error-level issue
        """
        if categories is not None:
            categories = list(categories)
        result = self.validate_transaction(data, user_id, categories, now)
        self._check(result, user_id)

        category = None
        if data.category_id:
            _, category = self._resolve_category(data.category_id, user_id, categories)

        transaction = Transaction(
            id=transaction_id or str(uuid4()),
            amount=to_decimal(data.amount),
            type=data.type,
            date=data.date,
            note=data.note,
            user_id=user_id,
            category_id=data.category_id,
            category=category,
        )
        self._audit.log_accepted(
            "transaction",
            transaction.id,
            user_id,
            {"amount": str(transaction.amount), "warnings": result.warnings},
        )
        return transaction

    def build_category(
        self,
        data: CategoryInput,
        user_id: str,
        category_id: Optional[str] = None,
    ) -> Category:
        """Validate input and build a Category."""
        result = self.validate_category(data)
        self._check(result, user_id)

        category = Category(
            id=category_id or str(uuid4()),
            name=sanitize_string(data.name),
            type=data.type,
            icon=data.icon,
            color=data.color,
            user_id=user_id,
        )
        self._audit.log_accepted("category", category.id, user_id)
        return category

    def build_budget(
        self,
        data: BudgetInput,
        user_id: str,
        budget_id: Optional[str] = None,
        categories: Optional[Iterable[Category]] = None,
    ) -> Budget:
        """Validate input and build a Budget."""
        if categories is not None:
            categories = list(categories)
        result = self.validate_budget(data, user_id, categories)
        self._check(result, user_id)

        budget = Budget(
            id=budget_id or str(uuid4()),
            category_id=data.category_id,
            limit=to_decimal(data.limit),
            period=data.period,
            start_date=data.start_date,
            end_date=data.end_date,
            user_id=user_id,
        )
        self._audit.log_accepted("budget", budget.id, user_id, {"limit": str(budget.limit)})
        return budget
