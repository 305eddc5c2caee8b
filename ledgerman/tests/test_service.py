"""
Tests for Ledger service API: recording movements and reading balances.
"""

from datetime import date, timedelta

import pytest

from ledgerman import (
    InsufficientStock,
    InvalidArgument,
    LedgerError,
    NotFound,
    ledger,
)
from ledgerman.models import Direction, StockStatus, StockTransaction


pytestmark = pytest.mark.django_db


class TestBalance:
    """Tests for ledger.balance() and friends."""

    def test_balance_empty_item(self, rice):
        """Balance is 0 when no transactions exist."""
        assert ledger.balance(rice) == 0
        assert ledger.totals(rice) == (0, 0)

    def test_balance_is_in_minus_out(self, rice):
        ledger.record(rice, 'IN', 100)
        ledger.record(rice, 'IN', 20)
        ledger.record(rice, 'OUT', 45)

        assert ledger.totals(rice) == (120, 45)
        assert ledger.balance(rice) == 75

    def test_balance_by_pk(self, stocked_rice):
        assert ledger.balance(stocked_rice.pk) == 100

    def test_balance_read_is_idempotent(self, stocked_rice):
        """Two reads without writes in between agree."""
        assert ledger.balance(stocked_rice) == ledger.balance(stocked_rice)

    def test_balances_are_per_item(self, rice, beans):
        ledger.record(rice, 'IN', 10)
        ledger.record(beans, 'IN', 3)

        assert ledger.balance(rice) == 10
        assert ledger.balance(beans) == 3

    def test_low_stock_is_inclusive(self, rice):
        """Balance equal to minimum stock counts as low."""
        ledger.record(rice, 'IN', 10)
        assert ledger.is_low_stock(rice)

        ledger.record(rice, 'IN', 1)
        assert not ledger.is_low_stock(rice)

    def test_stock_status(self, rice):
        assert ledger.stock_status(rice) == StockStatus.OUT_OF_STOCK

        ledger.record(rice, 'IN', 4)
        assert ledger.stock_status(rice) == StockStatus.LOW

        ledger.record(rice, 'IN', 50)
        assert ledger.stock_status(rice.pk) == StockStatus.ADEQUATE

    def test_is_low_stock_unknown_item(self, db):
        with pytest.raises(NotFound):
            ledger.is_low_stock(999999)


class TestRecord:
    """Tests for ledger.record()."""

    def test_record_in(self, rice, today):
        """IN increases the balance by its quantity."""
        txn = ledger.record(rice, 'IN', 100, reference_number='PO-1',
                            notes='Monthly delivery', recorded_by='alice')

        assert txn.pk is not None
        assert txn.direction == Direction.IN
        assert txn.quantity == 100
        assert txn.transaction_date == today
        assert txn.reference_number == 'PO-1'
        assert txn.recorded_by == 'alice'
        assert txn.reversed is False
        assert txn.balance_after == 100
        assert ledger.balance(rice) == 100

    def test_record_out_with_sufficient_stock(self, stocked_rice):
        """OUT decreases the balance by its quantity."""
        txn = ledger.record(stocked_rice, 'OUT', 30)

        assert txn.direction == Direction.OUT
        assert txn.balance_after == 70
        assert ledger.balance(stocked_rice) == 70

    def test_record_explicit_date(self, rice):
        past = date.today() - timedelta(days=10)
        txn = ledger.record(rice, 'IN', 5, past)

        txn.refresh_from_db()
        assert txn.transaction_date == past

    def test_record_accepts_enum_and_lowercase(self, rice):
        ledger.record(rice, Direction.IN, 5)
        ledger.record(rice, 'out', 2)

        assert ledger.balance(rice) == 3

    def test_record_by_item_pk(self, rice):
        txn = ledger.record(rice.pk, 'IN', 5)

        assert txn.item_id == rice.pk

    def test_record_unknown_item(self, db):
        with pytest.raises(NotFound) as exc:
            ledger.record(999999, 'IN', 5)

        assert exc.value.code == 'ITEM_NOT_FOUND'
        assert StockTransaction.objects.count() == 0

    @pytest.mark.parametrize('quantity', [0, -5, 1.5, True, '10'])
    def test_record_invalid_quantity(self, rice, quantity):
        with pytest.raises(InvalidArgument) as exc:
            ledger.record(rice, 'IN', quantity)

        assert exc.value.code == 'INVALID_QUANTITY'

    def test_record_invalid_direction(self, rice):
        with pytest.raises(InvalidArgument) as exc:
            ledger.record(rice, 'SIDEWAYS', 5)

        assert exc.value.code == 'INVALID_DIRECTION'

    def test_record_out_insufficient(self, stocked_rice):
        """OUT larger than the balance fails and writes nothing."""
        with pytest.raises(InsufficientStock) as exc:
            ledger.record(stocked_rice, 'OUT', 101)

        assert exc.value.code == 'INSUFFICIENT_STOCK'
        assert exc.value.available == 100
        assert exc.value.requested == 101
        assert StockTransaction.objects.count() == 1

    def test_record_out_on_empty_item(self, rice):
        with pytest.raises(InsufficientStock):
            ledger.record(rice, 'OUT', 1)

    def test_insufficient_stock_is_a_ledger_error(self, rice):
        with pytest.raises(LedgerError):
            ledger.record(rice, 'OUT', 1)

    def test_as_dict_includes_balance_after(self, rice):
        txn = ledger.record(rice, 'IN', 12)

        data = txn.as_dict()
        assert data['item_name'] == 'Rice'
        assert data['direction'] == 'IN'
        assert data['balance_after'] == 12
        assert data['original_transaction_id'] is None


class TestBoundaries:
    """OUT exactly equal to the balance, and one more."""

    def test_out_of_entire_balance(self, stocked_rice):
        txn = ledger.record(stocked_rice, 'OUT', 100)

        assert txn.balance_after == 0

    def test_out_of_balance_plus_one(self, stocked_rice):
        with pytest.raises(InsufficientStock) as exc:
            ledger.record(stocked_rice, 'OUT', 101)

        assert exc.value.available == 100
        assert exc.value.requested == 101
        assert 'Available: 100, Requested: 101' in str(exc.value)


class TestScenarioA:
    """Receive, consume, over-consume."""

    def test_receive_consume_and_reject(self, rice):
        assert ledger.record(rice, 'IN', 100).balance_after == 100
        assert ledger.record(rice, 'OUT', 30).balance_after == 70

        with pytest.raises(InsufficientStock) as exc:
            ledger.record(rice, 'OUT', 1000)

        assert 'Available: 70, Requested: 1000' in exc.value.message
        assert ledger.balance(rice) == 70

    def test_error_as_dict(self, rice):
        ledger.record(rice, 'IN', 70)

        with pytest.raises(InsufficientStock) as exc:
            ledger.record(rice, 'OUT', 1000)

        data = exc.value.as_dict()
        assert data['error'] == 'InsufficientStock'
        assert data['code'] == 'INSUFFICIENT_STOCK'
        assert data['data']['available'] == 70
        assert data['data']['requested'] == 1000
