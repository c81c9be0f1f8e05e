"""
Transaction Calculations

Pure functions for totals, filters and grouping over transactions.
They back the dashboard summary and the time series.

DESIGN DECISION: Every function here is order-independent and free of
side effects. Nothing is logged, cached or fetched. Callers are expected
to pass already-scoped data (one user, the right time window).
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from networthview.models.finance import Transaction, TransactionType


Number = Union[Decimal, int, float]


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def as_decimal(value: Number) -> Decimal:
    """
    Coerce an int, float or Decimal to Decimal.

    Floats go through `str` so 0.1 becomes Decimal("0.1"), not its binary
    expansion. Lets Decimal amounts mix with plain float arguments.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), Decimal(0))


# =============================================================================
# TOTALS
# =============================================================================

def calculate_net_balance(transactions: Iterable[Transaction]) -> Decimal:
    """
    Income minus expenses.

    Example:
        >>> calculate_net_balance([income_100, expense_50])
        Decimal('50')
    """
    balance = Decimal(0)
    for transaction in transactions:
        if transaction.type == TransactionType.INCOME:
            balance += transaction.amount
        else:
            balance -= transaction.amount
    return balance


def calculate_total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all income amounts (0 when there is none)."""
    return _sum_amounts(filter_by_type(transactions, TransactionType.INCOME))


def calculate_total_expenses(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all expense amounts (0 when there is none)."""
    return _sum_amounts(filter_by_type(transactions, TransactionType.EXPENSE))


# =============================================================================
# FILTERS
# =============================================================================

def filter_by_date_range(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
) -> list[Transaction]:
    """
    Keep transactions with `start <= date <= end`.

    Both bounds are inclusive and compared as full timestamps. A caller
    wanting whole days must pass 00:00 and 23:59:59.999999 itself.
    """
    return [t for t in transactions if start <= t.date <= end]


def filter_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> list[Transaction]:
    return [t for t in transactions if t.type == transaction_type]


def filter_by_category(
    transactions: Iterable[Transaction],
    category_id: str,
) -> list[Transaction]:
    return [t for t in transactions if t.category_id == category_id]


# =============================================================================
# GROUPING & TIME WINDOWS
# =============================================================================

def month_key(value: Union[date, datetime]) -> str:
    """Calendar month key, e.g. "2024-01"."""
    return f"{value.year:04d}-{value.month:02d}"


def group_by_month(
    transactions: Iterable[Transaction],
) -> dict[str, list[Transaction]]:
    """
    Group transactions into "YYYY-MM" buckets.

    Buckets keep input order. The grouping is a partition: every
    transaction lands in exactly one bucket.
    """
    groups: dict[str, list[Transaction]] = {}
    for transaction in transactions:
        groups.setdefault(month_key(transaction.date), []).append(transaction)
    return groups


def month_bounds(reference: Union[date, datetime]) -> tuple[datetime, datetime]:
    """First and last instant of the reference's calendar month."""
    start = _as_datetime(reference).replace(
        day=1, hour=0, minute=0, second=0, microsecond=0
    )
    end = start + relativedelta(months=1) - timedelta(microseconds=1)
    return start, end


def transactions_for_month(
    transactions: Iterable[Transaction],
    reference: Union[date, datetime],
) -> list[Transaction]:
    """Transactions falling in the same calendar month as `reference`."""
    start, end = month_bounds(reference)
    return filter_by_date_range(transactions, start, end)


def transactions_for_last_months(
    transactions: Iterable[Transaction],
    months: int,
    now: Optional[datetime] = None,
) -> list[Transaction]:
    """
    Transactions in the inclusive window [now - months, now].

    Month subtraction clamps to the end of shorter months
    (31 March minus one month is 28/29 February).
    """
    now = now or datetime.now()
    return filter_by_date_range(transactions, now - relativedelta(months=months), now)


# =============================================================================
# COMPARISONS & COUNTS
# =============================================================================

def calculate_percentage_change(old_value: Number, new_value: Number) -> float:
    """
    Percentage change from `old_value` to `new_value`.

    Zero-base policy: when `old_value` is exactly 0 the result is 100 if
    `new_value` is positive, otherwise 0. This is a display convention,
    not a mathematical identity.

    Example:
        >>> calculate_percentage_change(100, 150)
        50.0
    """
    old_value, new_value = as_decimal(old_value), as_decimal(new_value)
    if old_value == 0:
        return 100.0 if new_value > 0 else 0.0
    return float((new_value - old_value) / old_value * 100)


def count_by_type(
    transactions: Sequence[Transaction],
) -> dict[TransactionType, int]:
    """Count per transaction type; both keys are always present."""
    counts = {TransactionType.INCOME: 0, TransactionType.EXPENSE: 0}
    for transaction in transactions:
        counts[transaction.type] += 1
    return counts
