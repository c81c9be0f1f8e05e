"""
In-Memory Storage

Reference implementation of `FinanceStorageInterface` backed by dicts.
Used by the tests and for local experiments; nothing is persisted.
"""

from datetime import datetime
from typing import Optional

from networthview.models.finance import (
    Budget,
    Category,
    Transaction,
    TransactionType,
)
from networthview.services.storage.interface import (
    DuplicateError,
    FinanceStorageInterface,
    NotFoundError,
    StorageError,
)


class InMemoryFinanceStorage(FinanceStorageInterface):
    """
    Dict-backed storage.

    Records are stored per id in insertion order. Category snapshots are
    resolved at read time, the way an ORM join would.
    """

    def __init__(self):
        self._transactions: dict[str, Transaction] = {}
        self._categories: dict[str, Category] = {}
        self._budgets: dict[str, Budget] = {}

    @staticmethod
    def _require_owner(record, kind: str) -> str:
        if not record.user_id:
            raise StorageError(f"{kind} {record.id} has no user_id")
        return record.user_id

    def _with_snapshot(self, transaction: Transaction) -> Transaction:
        category = None
        if transaction.category_id:
            candidate = self._categories.get(transaction.category_id)
            if candidate and candidate.user_id == transaction.user_id:
                category = candidate
        return transaction.model_copy(update={"category": category})

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def list_transactions(
        self,
        user_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        category_id: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        results = []
        for transaction in self._transactions.values():
            if transaction.user_id != user_id:
                continue
            if date_from and transaction.date < date_from:
                continue
            if date_to and transaction.date > date_to:
                continue
            if category_id and transaction.category_id != category_id:
                continue
            if transaction_type and transaction.type != transaction_type:
                continue
            results.append(self._with_snapshot(transaction))
        return results

    def get_transaction(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        transaction = self._transactions.get(transaction_id)
        if transaction is None or transaction.user_id != user_id:
            return None
        return self._with_snapshot(transaction)

    def save_transaction(self, transaction: Transaction) -> Transaction:
        self._require_owner(transaction, "Transaction")
        # Snapshots are resolved on read, never stored
        self._transactions[transaction.id] = transaction.model_copy(update={"category": None})
        return self._with_snapshot(transaction)

    def delete_transaction(self, user_id: str, transaction_id: str) -> bool:
        transaction = self._transactions.get(transaction_id)
        if transaction is None or transaction.user_id != user_id:
            return False
        del self._transactions[transaction_id]
        return True

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def list_categories(self, user_id: str) -> list[Category]:
        return [c for c in self._categories.values() if c.user_id == user_id]

    def get_category(self, user_id: str, category_id: str) -> Optional[Category]:
        category = self._categories.get(category_id)
        if category is None or category.user_id != user_id:
            return None
        return category

    def save_category(self, category: Category) -> Category:
        user_id = self._require_owner(category, "Category")
        for existing in self.list_categories(user_id):
            if existing.id != category.id and existing.name.lower() == category.name.lower():
                raise DuplicateError(f"Category name already in use: {category.name}")
        self._categories[category.id] = category
        return category

    def delete_category(self, user_id: str, category_id: str) -> int:
        if self.get_category(user_id, category_id) is None:
            raise NotFoundError(f"Category not found: {category_id}")
        del self._categories[category_id]

        orphaned = 0
        for transaction_id, transaction in list(self._transactions.items()):
            if transaction.user_id == user_id and transaction.category_id == category_id:
                self._transactions[transaction_id] = transaction.model_copy(
                    update={"category_id": None, "category": None}
                )
                orphaned += 1

        for budget_id, budget in list(self._budgets.items()):
            if budget.user_id == user_id and budget.category_id == category_id:
                del self._budgets[budget_id]
        return orphaned

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    def list_budgets(self, user_id: str) -> list[Budget]:
        return [b for b in self._budgets.values() if b.user_id == user_id]

    def save_budget(self, budget: Budget) -> Budget:
        self._require_owner(budget, "Budget")
        self._budgets[budget.id] = budget
        return budget
