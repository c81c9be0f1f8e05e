"""Shared fixtures."""

from datetime import datetime

import pytest

from networthview.config import AppSettings
from networthview.models import TransactionType
from tests.factories import FOOD, SALARY, TRANSPORT, make_transaction


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, log_json=False)


@pytest.fixture
def categorized_transactions():
    """Three expenses over two categories plus one salary income."""
    return [
        make_transaction(100, category=FOOD, date=datetime(2024, 1, 15)),
        make_transaction(200, category=FOOD, date=datetime(2024, 1, 20)),
        make_transaction(150, category=TRANSPORT, date=datetime(2024, 1, 25)),
        make_transaction(1000, TransactionType.INCOME, category=SALARY, date=datetime(2024, 2, 1)),
    ]
