"""
Data Models Package

This package contains all Pydantic models used in NetworthView.
All data flowing through the system must conform to these schemas.
"""

from networthview.models.finance import (
    CATEGORY_NAME_MAX_LENGTH,
    Budget,
    BudgetPeriod,
    Category,
    Transaction,
    TransactionType,
)
from networthview.models.inputs import (
    BudgetInput,
    CategoryInput,
    TransactionInput,
)
from networthview.models.summaries import (
    BudgetAlerts,
    BudgetProgressData,
    BudgetStats,
    CategoryOverview,
    CategorySummary,
    DashboardSummary,
    PieChartDataPoint,
    TimeSeriesDataPoint,
    UncategorizedStats,
)
from networthview.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from networthview.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Records
    "CATEGORY_NAME_MAX_LENGTH",
    "Budget",
    "BudgetPeriod",
    "Category",
    "Transaction",
    "TransactionType",
    # Inputs
    "BudgetInput",
    "CategoryInput",
    "TransactionInput",
    # Derived
    "BudgetAlerts",
    "BudgetProgressData",
    "BudgetStats",
    "CategoryOverview",
    "CategorySummary",
    "DashboardSummary",
    "PieChartDataPoint",
    "TimeSeriesDataPoint",
    "UncategorizedStats",
    # Audit
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
