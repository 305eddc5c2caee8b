"""
Item registry — CRUD over stocked items.

The registry owns item metadata (name, unit, minimum stock, damage
counter). It only talks to the ledger to refuse deleting items that
still have transactions.

Names are unique at the database level; a duplicate surfaces as
IntegrityError and is reported as Conflict('DUPLICATE_NAME').

delete_item locks in the same order as the transaction engine:
the item's StockTransaction rows (ascending pk), then the Item row.
"""

import logging

from django.db import IntegrityError, transaction

from ledgerman.conf import ledgerman_settings
from ledgerman.exceptions import Conflict, InvalidArgument, NotFound
from ledgerman.models.item import Item
from ledgerman.models.transaction import StockTransaction

logger = logging.getLogger('ledgerman')


def _item_pk(item):
    return getattr(item, 'pk', item)


class ItemRegistry:
    """Item registry methods."""

    @classmethod
    def get_item(cls, item) -> Item:
        """
        Resolve an item.

        Raises:
            NotFound('ITEM_NOT_FOUND'): If no item has this id
        """
        pk = _item_pk(item)
        found = Item.objects.filter(pk=pk).first()
        if found is None:
            raise NotFound('ITEM_NOT_FOUND', f"Item not found with id: {pk}", item_id=pk)
        return found

    @classmethod
    def exists(cls, item) -> bool:
        return Item.objects.filter(pk=_item_pk(item)).exists()

    @classmethod
    def get_minimum_stock(cls, item) -> int:
        return cls.get_item(item).minimum_stock

    @classmethod
    def list_items(cls, search: str | None = None, status=None) -> list[Item]:
        """
        List items, optionally filtered.

        Args:
            search: Case-insensitive substring of the name
            status: StockStatus value; compares against the derived balance
        """
        qs = Item.objects.all()
        if search:
            qs = qs.filter(name__icontains=search.strip())
        items = list(qs)

        if status is not None:
            from ledgerman.services.balances import LedgerBalances
            items = [i for i in items if LedgerBalances.stock_status(i) == status]
        return items

    @classmethod
    def create_item(cls, name: str, unit: str, minimum_stock: int,
                    description: str = '') -> Item:
        """
        Register a new item.

        Raises:
            InvalidArgument: Blank name/unit or non-positive minimum stock
            Conflict('DUPLICATE_NAME'): Another item already has this name
        """
        name, unit = cls._validate(name, unit, minimum_stock)

        try:
            with transaction.atomic():
                item = Item.objects.create(
                    name=name,
                    unit=unit,
                    minimum_stock=minimum_stock,
                    description=description or '',
                )
        except IntegrityError:
            raise cls._duplicate(name)

        logger.info(
            "ledger.item.create",
            extra={"item_id": item.pk, "item_name": name, "minimum_stock": minimum_stock},
        )
        return item

    @classmethod
    def update_item(cls, item, name: str, unit: str, minimum_stock: int,
                    description: str = '') -> Item:
        """Replace an item's metadata. Same rules as create_item()."""
        name, unit = cls._validate(name, unit, minimum_stock)

        with transaction.atomic():
            existing = Item.objects.select_for_update().filter(pk=_item_pk(item)).first()
            if existing is None:
                raise NotFound('ITEM_NOT_FOUND', item_id=_item_pk(item))

            existing.name = name
            existing.unit = unit
            existing.minimum_stock = minimum_stock
            existing.description = description or ''
            try:
                with transaction.atomic():
                    existing.save()
            except IntegrityError:
                raise cls._duplicate(name)
            return existing

    @classmethod
    def record_damage(cls, item, quantity: int) -> Item:
        """
        Add ``quantity`` to the item's damaged counter.

        Negative quantities correct earlier records; the counter never
        goes below zero.
        """
        with transaction.atomic():
            existing = Item.objects.select_for_update().filter(pk=_item_pk(item)).first()
            if existing is None:
                raise NotFound('ITEM_NOT_FOUND', item_id=_item_pk(item))

            existing.damaged_quantity = max(0, existing.damaged_quantity + quantity)
            existing.save(update_fields=['damaged_quantity', 'updated_at'])
            return existing

    @classmethod
    def delete_item(cls, item, cascade: bool | None = None) -> None:
        """
        Delete an item.

        Args:
            cascade: Also delete its transactions. None = CASCADE_ITEM_DELETE

        Raises:
            NotFound('ITEM_NOT_FOUND')
            Conflict('ITEM_HAS_TRANSACTIONS'): Transactions exist and no cascade
        """
        if cascade is None:
            cascade = ledgerman_settings.CASCADE_ITEM_DELETE

        with transaction.atomic():
            transactions = StockTransaction.objects.for_item(_item_pk(item))
            # Transaction rows before the item row
            list(transactions.select_for_update().order_by('pk').values_list('pk', flat=True))

            existing = Item.objects.select_for_update().filter(pk=_item_pk(item)).first()
            if existing is None:
                raise NotFound('ITEM_NOT_FOUND', item_id=_item_pk(item))

            count = transactions.count()
            if count and not cascade:
                raise Conflict(
                    'ITEM_HAS_TRANSACTIONS',
                    "Cannot delete item with existing transactions. "
                    f"Found {count} transaction(s).",
                    item_id=existing.pk,
                    transactions=count,
                )

            # Reversals first: they point at their originals
            transactions.filter(original__isnull=False).delete()
            transactions.delete()
            pk = existing.pk
            existing.delete()

        logger.info(
            "ledger.item.delete",
            extra={"item_id": pk, "cascaded_transactions": count},
        )

    @classmethod
    def _duplicate(cls, name) -> Conflict:
        return Conflict(
            'DUPLICATE_NAME',
            f"Item with name '{name}' already exists",
            name=name,
        )

    @classmethod
    def _validate(cls, name, unit, minimum_stock) -> tuple[str, str]:
        name = (name or '').strip()
        unit = (unit or '').strip()
        if not name:
            raise InvalidArgument('BLANK_NAME')
        if not unit:
            raise InvalidArgument('BLANK_UNIT')
        if (isinstance(minimum_stock, bool) or not isinstance(minimum_stock, int)
                or minimum_stock <= 0):
            raise InvalidArgument('INVALID_MINIMUM_STOCK', minimum_stock=minimum_stock)
        return name, unit
