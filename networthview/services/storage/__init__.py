"""
Storage Services Package

Provides the abstract data-access interface and an in-memory implementation.
Designed so a database-backed store can be swapped in without touching
the reporting or calculation layers.
"""

from networthview.services.storage.interface import (
    DuplicateError,
    FinanceStorageInterface,
    NotFoundError,
    StorageError,
)
from networthview.services.storage.memory import InMemoryFinanceStorage

__all__ = [
    # Interface
    "FinanceStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryFinanceStorage",
]
