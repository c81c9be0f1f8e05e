"""Services package."""

from networthview.services.storage import (
    DuplicateError,
    FinanceStorageInterface,
    InMemoryFinanceStorage,
    NotFoundError,
    StorageError,
)

__all__ = [
    "DuplicateError",
    "FinanceStorageInterface",
    "InMemoryFinanceStorage",
    "NotFoundError",
    "StorageError",
]
