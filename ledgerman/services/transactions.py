"""
Stock transactions — state-changing ledger operations.

record, edit, reverse and undo_reverse.

All methods run under transaction.atomic() and lock the affected Item
rows with select_for_update() BEFORE reading balances, so the balance
check and the write are atomic per item. Balance arithmetic lives in
ledgerman.rules.

Lock order (shared with ItemRegistry.delete_item):
    1. StockTransaction rows, ascending pk
    2. Item rows, ascending pk
"""

import logging
from datetime import date

from django.core.exceptions import ValidationError
from django.db import transaction

from ledgerman import rules
from ledgerman.adapters import get_supplier_validator
from ledgerman.conf import ledgerman_settings
from ledgerman.exceptions import InvalidArgument, InvalidState, NotFound
from ledgerman.models.item import Item
from ledgerman.models.transaction import StockTransaction
from ledgerman.rules import Active, Posting, Reversed
from ledgerman.services.balances import LedgerBalances

logger = logging.getLogger('ledgerman')

# Fields edit() may change besides item, direction and quantity
EDITABLE_FIELDS = frozenset({
    'transaction_date',
    'reference_number',
    'notes',
    'recorded_by',
    'supplier_id',
})


class LedgerTransactions:
    """State-changing ledger methods."""

    @classmethod
    def record(cls, item, direction, quantity: int,
               transaction_date: date | None = None, *,
               reference_number: str = '', notes: str = '',
               recorded_by: str = '', supplier_id: int | None = None) -> StockTransaction:
        """
        Record a stock movement.

        Raises:
            InvalidArgument('INVALID_QUANTITY' | 'INVALID_DIRECTION')
            NotFound('ITEM_NOT_FOUND' | 'SUPPLIER_NOT_FOUND')
            InsufficientStock: OUT larger than the current balance

        Returns:
            The new StockTransaction with ``balance_after`` set

        Concurrency:
            - Locks the Item row, then reads the balance
            - Insert happens inside the same atomic block
        """
        direction = rules.parse_direction(direction)
        rules.validate_quantity(quantity)
        cls._validate_supplier(supplier_id)

        with transaction.atomic():
            locked_item = cls._lock_item(item)

            rules.project_record(
                LedgerBalances.balance(locked_item),
                Posting(direction, quantity),
                item_id=locked_item.pk,
            )

            txn = StockTransaction.objects.create(
                item=locked_item,
                direction=direction,
                quantity=quantity,
                transaction_date=transaction_date or date.today(),
                reference_number=reference_number or '',
                notes=notes or '',
                recorded_by=recorded_by or '',
                supplier_id=supplier_id,
            )
            txn.balance_after = LedgerBalances.balance(locked_item)

        logger.info(
            "ledger.record",
            extra={
                "transaction_id": txn.pk,
                "item_id": locked_item.pk,
                "direction": direction,
                "qty": quantity,
                "balance_after": txn.balance_after,
            },
        )
        return txn

    @classmethod
    def edit(cls, txn, *, item=None, direction=None, quantity: int | None = None,
             **metadata) -> StockTransaction:
        """
        Edit a transaction in place.

        Omitted arguments keep their current value. The edit is validated
        as "withdraw the old posting, apply the new one":

        - same item: balance - old_effect + new_effect >= 0
        - item changed: old item balance - old_effect >= 0 and
          new item balance + new_effect >= 0

        Raises:
            NotFound('TRANSACTION_NOT_FOUND' | 'ITEM_NOT_FOUND')
            InvalidArgument: Bad quantity/direction or a non-editable field
            InvalidState('TRANSACTION_REVERSED' | 'REVERSAL_NOT_EDITABLE')
            InsufficientStock: Either item would go negative
        """
        unknown = set(metadata) - EDITABLE_FIELDS
        if unknown:
            raise InvalidArgument('INVALID_FIELD', fields=', '.join(sorted(unknown)))
        if direction is not None:
            direction = rules.parse_direction(direction)
        if quantity is not None:
            rules.validate_quantity(quantity)
        if metadata.get('supplier_id') is not None:
            cls._validate_supplier(metadata['supplier_id'])

        with transaction.atomic():
            locked = cls._lock_transaction(txn)

            if isinstance(rules.state_of(locked), Reversed):
                raise InvalidState('TRANSACTION_REVERSED', transaction_id=locked.pk)
            if locked.is_reversal:
                raise InvalidState('REVERSAL_NOT_EDITABLE', transaction_id=locked.pk)

            old_item_id = locked.item_id
            new_item_id = old_item_id if item is None else cls._item_pk(item)

            # Lock both items in pk order
            items = {
                i.pk: i for i in
                Item.objects.select_for_update().filter(
                    pk__in={old_item_id, new_item_id}
                ).order_by('pk')
            }
            if new_item_id not in items:
                raise NotFound(
                    'ITEM_NOT_FOUND',
                    f"Item not found with id: {new_item_id}",
                    item_id=new_item_id,
                )

            old = Posting(locked.direction, locked.quantity)
            new = Posting(direction or locked.direction, quantity or locked.quantity)

            if new_item_id == old_item_id:
                rules.project_same_item_edit(
                    LedgerBalances.balance(old_item_id), old, new,
                    item_id=old_item_id,
                )
            else:
                rules.project_cross_item_edit(
                    LedgerBalances.balance(old_item_id),
                    LedgerBalances.balance(new_item_id),
                    old, new,
                )

            locked.item = items[new_item_id]
            locked.direction = new.direction
            locked.quantity = new.quantity
            for field, value in metadata.items():
                if value is None and field in ('reference_number', 'notes', 'recorded_by'):
                    value = ''
                setattr(locked, field, value)
            if locked.transaction_date is None:
                locked.transaction_date = date.today()
            locked.save()

            locked.balance_after = LedgerBalances.balance(new_item_id)

        logger.info(
            "ledger.edit",
            extra={
                "transaction_id": locked.pk,
                "old_item_id": old_item_id,
                "item_id": new_item_id,
                "old": f"{old.direction} {old.quantity}",
                "new": f"{new.direction} {new.quantity}",
                "balance_after": locked.balance_after,
            },
        )
        return locked

    @classmethod
    def reverse(cls, txn, reason: str = '', reversed_by: str = '') -> StockTransaction:
        """
        Nullify a transaction with a counter-transaction.

        The reversal has the opposite direction, the same quantity and
        item, and points back at the original. Reversing an IN is an OUT
        and must not drive the balance negative.

        Raises:
            NotFound('TRANSACTION_NOT_FOUND')
            InvalidState('ALREADY_REVERSED' | 'CANNOT_REVERSE_REVERSAL')
            InsufficientStock

        Returns:
            The reversal StockTransaction with ``balance_after`` set
        """
        with transaction.atomic():
            original = cls._lock_transaction(txn)

            if isinstance(rules.state_of(original), Reversed):
                raise InvalidState('ALREADY_REVERSED', transaction_id=original.pk)
            if original.is_reversal:
                raise InvalidState('CANNOT_REVERSE_REVERSAL', transaction_id=original.pk)

            locked_item = cls._lock_item(original.item_id)
            rules.project_reverse(
                LedgerBalances.balance(locked_item),
                Posting(original.direction, original.quantity),
                item_id=locked_item.pk,
            )

            notes = f"Reversal of transaction #{original.pk}"
            if reason:
                notes = f"{notes}: {reason}"

            reversal = StockTransaction.objects.create(
                item=locked_item,
                direction=rules.opposite(original.direction),
                quantity=original.quantity,
                transaction_date=date.today(),
                reference_number=f"{ledgerman_settings.REVERSAL_REFERENCE_PREFIX}{original.pk}",
                notes=notes[:500],
                recorded_by=reversed_by or '',
                supplier_id=original.supplier_id,
                original=original,
            )

            original.reversed = True
            original.save(update_fields=['reversed', 'updated_at'])

            reversal.balance_after = LedgerBalances.balance(locked_item)

        logger.info(
            "ledger.reverse",
            extra={
                "transaction_id": original.pk,
                "reversal_id": reversal.pk,
                "item_id": locked_item.pk,
                "reason": reason,
                "balance_after": reversal.balance_after,
            },
        )
        return reversal

    @classmethod
    def undo_reverse(cls, txn) -> StockTransaction:
        """
        Restore a reversed transaction by deleting its reversal.

        Removing an IN reversal takes stock away, so it is checked like
        any other withdrawal.

        Raises:
            NotFound('TRANSACTION_NOT_FOUND')
            InvalidState('NOT_REVERSED' | 'REVERSAL_MISSING')
            InsufficientStock

        Returns:
            The original StockTransaction with ``balance_after`` set
        """
        with transaction.atomic():
            original = cls._lock_transaction(txn)

            state = rules.state_of(original)
            if isinstance(state, Active):
                raise InvalidState('NOT_REVERSED', transaction_id=original.pk)
            if state.reversal_id is None:
                raise InvalidState('REVERSAL_MISSING', transaction_id=original.pk)

            reversal = StockTransaction.objects.select_for_update().find_by_id(state.reversal_id)

            locked_item = cls._lock_item(reversal.item_id)
            rules.project_undo_reverse(
                LedgerBalances.balance(locked_item),
                Posting(reversal.direction, reversal.quantity),
                item_id=locked_item.pk,
            )

            reversal_id = reversal.pk
            reversal.delete()

            original.reversed = False
            original.save(update_fields=['reversed', 'updated_at'])

            original.balance_after = LedgerBalances.balance(locked_item)

        logger.info(
            "ledger.undo_reverse",
            extra={
                "transaction_id": original.pk,
                "reversal_id": reversal_id,
                "item_id": locked_item.pk,
                "balance_after": original.balance_after,
            },
        )
        return original

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _item_pk(cls, item):
        """Primary key of ``item`` (instance, int or numeric string) as stored."""
        pk = getattr(item, 'pk', item)
        try:
            return Item._meta.pk.to_python(pk)
        except ValidationError as e:
            raise NotFound(
                'ITEM_NOT_FOUND', f"Item not found with id: {pk}", item_id=pk
            ) from e

    @classmethod
    def _lock_item(cls, item) -> Item:
        pk = getattr(item, 'pk', item)
        locked = Item.objects.select_for_update().filter(pk=pk).first()
        if locked is None:
            raise NotFound('ITEM_NOT_FOUND', f"Item not found with id: {pk}", item_id=pk)
        return locked

    @classmethod
    def _lock_transaction(cls, txn) -> StockTransaction:
        pk = getattr(txn, 'pk', txn)
        locked = StockTransaction.objects.select_for_update().find_by_id(pk)
        if locked is None:
            raise NotFound(
                'TRANSACTION_NOT_FOUND',
                f"Transaction not found with id: {pk}",
                transaction_id=pk,
            )
        return locked

    @classmethod
    def _validate_supplier(cls, supplier_id) -> None:
        if supplier_id is None:
            return
        validator = get_supplier_validator()
        if validator is None:
            return
        result = validator.validate_supplier(supplier_id)
        if not result.valid:
            raise NotFound(
                'SUPPLIER_NOT_FOUND',
                result.message or f"Supplier not found with id: {supplier_id}",
                supplier_id=supplier_id,
            )
