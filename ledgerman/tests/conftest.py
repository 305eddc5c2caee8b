"""
Pytest fixtures for Ledgerman tests.
"""

from datetime import date, timedelta

import pytest

from ledgerman import ledger
from ledgerman.adapters import reset_supplier_validator
from ledgerman.models import Item


@pytest.fixture(autouse=True)
def _fresh_supplier_validator():
    """Validator instances are cached per process."""
    reset_supplier_validator()
    yield
    reset_supplier_validator()


@pytest.fixture
def rice(db):
    """Create a test item with no transactions."""
    return Item.objects.create(
        name='Rice',
        unit='sacks',
        minimum_stock=10,
    )


@pytest.fixture
def beans(db):
    """Create a second empty item."""
    return Item.objects.create(
        name='Beans',
        unit='kg',
        minimum_stock=5,
    )


@pytest.fixture
def stocked_rice(rice):
    """Rice with a single receipt of 100."""
    ledger.record(rice, 'IN', 100, reference_number='PO-001')
    return rice


@pytest.fixture
def today():
    """Return today's date."""
    return date.today()


@pytest.fixture
def yesterday():
    """Return yesterday's date."""
    return date.today() - timedelta(days=1)
