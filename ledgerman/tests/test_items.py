"""
Tests for the item registry.
"""

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from ledgerman import Conflict, InvalidArgument, NotFound, ledger
from ledgerman.models import Item, StockStatus, StockTransaction


pytestmark = pytest.mark.django_db


class TestCreateItem:
    """Tests for ledger.create_item()."""

    def test_create(self):
        item = ledger.create_item('  Cooking Oil ', 'liters', 20, description='Soy')

        assert item.pk is not None
        assert item.name == 'Cooking Oil'
        assert item.unit == 'liters'
        assert item.minimum_stock == 20
        assert item.damaged_quantity == 0
        assert ledger.balance(item) == 0

    def test_duplicate_name(self, rice):
        with pytest.raises(Conflict) as exc:
            ledger.create_item('Rice', 'kg', 5)

        assert exc.value.code == 'DUPLICATE_NAME'
        assert Item.objects.filter(name='Rice').count() == 1

    def test_duplicate_leaves_transaction_usable(self, rice):
        """The unique constraint failure is contained in its own savepoint."""
        with pytest.raises(Conflict):
            ledger.create_item('Rice', 'kg', 5)

        salt = ledger.create_item('Salt', 'kg', 5)

        assert ledger.exists(salt)

    @pytest.mark.parametrize('name,unit,minimum,code', [
        ('', 'kg', 5, 'BLANK_NAME'),
        ('   ', 'kg', 5, 'BLANK_NAME'),
        ('Salt', '', 5, 'BLANK_UNIT'),
        ('Salt', 'kg', 0, 'INVALID_MINIMUM_STOCK'),
        ('Salt', 'kg', -1, 'INVALID_MINIMUM_STOCK'),
    ])
    def test_validation(self, name, unit, minimum, code):
        with pytest.raises(InvalidArgument) as exc:
            ledger.create_item(name, unit, minimum)

        assert exc.value.code == code
        assert not Item.objects.exists()


class TestUpdateItem:
    """Tests for ledger.update_item()."""

    def test_update(self, rice):
        updated = ledger.update_item(rice, 'Rice', 'kg', 25, description='Long grain')

        rice.refresh_from_db()
        assert updated.pk == rice.pk
        assert rice.unit == 'kg'
        assert rice.minimum_stock == 25
        assert rice.description == 'Long grain'

    def test_rename_to_taken_name(self, rice, beans):
        with pytest.raises(Conflict) as exc:
            ledger.update_item(beans, 'Rice', 'kg', 5)

        assert exc.value.code == 'DUPLICATE_NAME'
        beans.refresh_from_db()
        assert beans.name == 'Beans'

    def test_update_unknown(self, db):
        with pytest.raises(NotFound):
            ledger.update_item(999999, 'Salt', 'kg', 5)

    def test_threshold_change_affects_low_stock(self, stocked_rice):
        assert not ledger.is_low_stock(stocked_rice)

        ledger.update_item(stocked_rice, 'Rice', 'sacks', 100)

        assert ledger.is_low_stock(stocked_rice.pk)


class TestRecordDamage:
    """Damaged units are tracked apart from the ledger."""

    def test_record_damage(self, stocked_rice):
        item = ledger.record_damage(stocked_rice, 3)
        item = ledger.record_damage(item, 2)

        assert item.damaged_quantity == 5
        assert ledger.balance(stocked_rice) == 100

    def test_damage_never_negative(self, rice):
        ledger.record_damage(rice, 2)

        item = ledger.record_damage(rice, -10)

        assert item.damaged_quantity == 0


class TestDeleteItem:
    """Tests for ledger.delete_item()."""

    def test_delete_without_transactions(self, rice):
        ledger.delete_item(rice)

        assert not ledger.exists(rice.pk)

    def test_delete_with_transactions(self, stocked_rice):
        with pytest.raises(Conflict) as exc:
            ledger.delete_item(stocked_rice)

        assert exc.value.code == 'ITEM_HAS_TRANSACTIONS'
        assert 'Found 1 transaction(s)' in exc.value.message
        assert ledger.exists(stocked_rice)

    def test_delete_cascade(self, stocked_rice, beans):
        t1 = StockTransaction.objects.get()
        ledger.reverse(t1)
        ledger.record(beans, 'IN', 5)

        ledger.delete_item(stocked_rice, cascade=True)

        assert not ledger.exists(stocked_rice)
        assert StockTransaction.objects.count() == 1
        assert ledger.balance(beans) == 5

    def test_delete_cascade_setting(self, stocked_rice, settings):
        settings.LEDGERMAN = {'CASCADE_ITEM_DELETE': True}

        ledger.delete_item(stocked_rice.pk)

        assert not StockTransaction.objects.exists()

    def test_delete_reads_transactions_before_item(self, stocked_rice):
        """Row access order matches the transaction engine: ledger rows, then item."""
        with CaptureQueriesContext(connection) as ctx:
            ledger.delete_item(stocked_rice, cascade=True)

        sql = [q['sql'] for q in ctx.captured_queries]
        first_txn = next(i for i, s in enumerate(sql) if 'FROM "ledgerman_stocktransaction"' in s)
        first_item = next(i for i, s in enumerate(sql) if 'FROM "ledgerman_item"' in s)
        assert first_txn < first_item

    def test_delete_unknown(self, db):
        with pytest.raises(NotFound):
            ledger.delete_item(999999)


class TestListItems:
    """Tests for ledger.list_items()."""

    def test_ordered_by_name(self, rice, beans):
        assert [i.name for i in ledger.list_items()] == ['Beans', 'Rice']

    def test_search(self, rice, beans):
        assert ledger.list_items(search='ric') == [rice]

    def test_status_filter(self, stocked_rice, beans):
        assert ledger.list_items(status=StockStatus.ADEQUATE) == [stocked_rice]
        assert ledger.list_items(status=StockStatus.OUT_OF_STOCK) == [beans]
        assert ledger.list_items(status=StockStatus.LOW) == []

    def test_get_item_and_minimum(self, rice):
        assert ledger.get_item(rice.pk) == rice
        assert ledger.get_minimum_stock(rice) == 10

    def test_get_unknown_item(self, db):
        with pytest.raises(NotFound) as exc:
            ledger.get_item(999999)

        assert exc.value.message == 'Item not found with id: 999999'
