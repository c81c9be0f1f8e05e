"""
Abstract Storage Interface

DESIGN DECISION: Data access is an explicitly constructed object passed
to whatever needs it (validator, dashboard service). There is no
process-wide client. This allows us to:
1. Swap the in-memory store for a real database later
2. Use in-memory storage for testing
3. Keep the calculation package free of any persistence import

The interface is intentionally simple - we're not building a full ORM.
Just the operations the reporting and validation layers need.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from networthview.models.finance import (
    Budget,
    Category,
    Transaction,
    TransactionType,
)


class FinanceStorageInterface(ABC):
    """
    Abstract interface for transaction, category and budget storage.

    Every read is scoped to one user. Transactions returned by
    `list_transactions` carry their current category snapshot (or None
    when the referenced category no longer resolves).
    """

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        category_id: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """
        List a user's transactions with optional filters.

        Args:
            user_id: Owner of the transactions
            date_from: Only transactions on or after this instant
            date_to: Only transactions on or before this instant
            category_id: Only transactions referencing this category
            transaction_type: Only INCOME or only EXPENSE

        Returns:
            Matching transactions with their category snapshot embedded
        """
        pass

    @abstractmethod
    def get_transaction(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        pass

    @abstractmethod
    def save_transaction(self, transaction: Transaction) -> Transaction:
        """
        Insert or replace a transaction.

        Raises:
            StorageError: If the transaction has no owner
        """
        pass

    @abstractmethod
    def delete_transaction(self, user_id: str, transaction_id: str) -> bool:
        """Delete a transaction. Returns False if it did not exist."""
        pass

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_categories(self, user_id: str) -> list[Category]:
        pass

    @abstractmethod
    def get_category(self, user_id: str, category_id: str) -> Optional[Category]:
        pass

    @abstractmethod
    def save_category(self, category: Category) -> Category:
        """
        Insert or replace a category.

        Raises:
            DuplicateError: If the user already has another category with
                            the same name
        """
        pass

    @abstractmethod
    def delete_category(self, user_id: str, category_id: str) -> int:
        """
        Delete a category.

        Transactions referencing it become uncategorized. Budgets on the
        category are deleted with it.

        Returns:
            Number of transactions that were orphaned

        Raises:
            NotFoundError: If the category doesn't exist
        """
        pass

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_budgets(self, user_id: str) -> list[Budget]:
        pass

    @abstractmethod
    def save_budget(self, budget: Budget) -> Budget:
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
