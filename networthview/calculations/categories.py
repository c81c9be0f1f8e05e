"""
Category Calculations

Aggregation of transactions into per-category summaries for the
breakdown charts, plus uncategorized-transaction detection.

NOTE: Two different ideas of "uncategorized" live in this module.

- `aggregate_by_category` only counts transactions that have BOTH a
  `category_id` and an embedded `category` snapshot. Anything else is
  left out of the groups (but still counts toward the percentage base).
- `get_uncategorized_transactions` only looks at `category_id`. A
  transaction whose category id does not resolve to a snapshot is NOT
  uncategorized here.

Reports built on both must not assume the two sets are complementary.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from networthview.calculations.transactions import filter_by_type
from networthview.models.finance import Transaction, TransactionType
from networthview.models.summaries import CategorySummary, UncategorizedStats


DEFAULT_TOP_CATEGORIES = 5


def aggregate_by_category(transactions: Sequence[Transaction]) -> list[CategorySummary]:
    """
    Aggregate transactions by category.

    Amounts are summed as-is: income and expense in the same category are
    added together, not netted. The percentage base is the total of ALL
    input transactions, including the ones left out of the groups.

    Returns:
        Summaries sorted by amount, largest first. Ties keep the order in
        which the categories were first seen.
    """
    groups: dict[str, dict] = {}

    for transaction in transactions:
        if not (transaction.category_id and transaction.category):
            continue
        group = groups.setdefault(
            transaction.category_id,
            {"name": transaction.category.name, "amount": Decimal(0), "count": 0},
        )
        group["amount"] += transaction.amount
        group["count"] += 1

    total = sum((t.amount for t in transactions), Decimal(0))

    summaries = [
        CategorySummary(
            category_id=category_id,
            category_name=group["name"],
            amount=group["amount"],
            percentage=float(group["amount"] / total * 100) if total > 0 else 0.0,
            transaction_count=group["count"],
        )
        for category_id, group in groups.items()
    ]
    # sorted() is stable, so ties stay in first-seen order
    return sorted(summaries, key=lambda s: s.amount, reverse=True)


def aggregate_expenses_by_category(
    transactions: Iterable[Transaction],
) -> list[CategorySummary]:
    """Category summaries over expenses only; percentages are of total expenses."""
    return aggregate_by_category(filter_by_type(transactions, TransactionType.EXPENSE))


def aggregate_income_by_category(
    transactions: Iterable[Transaction],
) -> list[CategorySummary]:
    """Category summaries over income only; percentages are of total income."""
    return aggregate_by_category(filter_by_type(transactions, TransactionType.INCOME))


def get_top_categories(
    transactions: Iterable[Transaction],
    limit: int = DEFAULT_TOP_CATEGORIES,
) -> list[CategorySummary]:
    """The `limit` biggest expense categories (all of them if there are fewer)."""
    return aggregate_expenses_by_category(transactions)[:limit]


def calculate_category_diversity(transactions: Iterable[Transaction]) -> int:
    """Number of distinct category ids in use."""
    return len({t.category_id for t in transactions if t.category_id})


def get_uncategorized_transactions(
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Transactions without a category id."""
    return [t for t in transactions if not t.category_id]


def calculate_uncategorized_stats(
    transactions: Sequence[Transaction],
) -> UncategorizedStats:
    """Count and share (by number of transactions) of uncategorized transactions."""
    uncategorized = get_uncategorized_transactions(transactions)
    total = len(transactions)
    return UncategorizedStats(
        count=len(uncategorized),
        percentage=len(uncategorized) / total * 100 if total > 0 else 0.0,
    )
