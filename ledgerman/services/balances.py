"""
Stock balances — derived, read-only values.

The balance of an item is never stored: it is always total IN minus
total OUT over its ledger entries. All methods are classmethods and use
no locking; the transaction engine locks before calling them.
"""

from ledgerman.models.enums import Direction, StockStatus
from ledgerman.models.item import Item
from ledgerman.models.transaction import StockTransaction


class LedgerBalances:
    """Read-only balance methods."""

    @classmethod
    def totals(cls, item) -> tuple[int, int]:
        """(total_in, total_out) for an item (instance or pk)."""
        return (
            StockTransaction.objects.sum_quantity(item, Direction.IN),
            StockTransaction.objects.sum_quantity(item, Direction.OUT),
        )

    @classmethod
    def balance(cls, item) -> int:
        """
        Current balance of an item.

        balance = total_in - total_out

        Args:
            item: Item instance or primary key

        Returns:
            int, always reflecting the latest committed state
        """
        total_in, total_out = cls.totals(item)
        return total_in - total_out

    @classmethod
    def is_low_stock(cls, item) -> bool:
        """Balance at or under the item's minimum stock."""
        item = cls._as_item(item)
        return cls.balance(item) <= item.minimum_stock

    @classmethod
    def stock_status(cls, item) -> StockStatus:
        item = cls._as_item(item)
        return status_for(cls.balance(item), item.minimum_stock)

    @classmethod
    def _as_item(cls, item) -> Item:
        if isinstance(item, Item):
            return item
        from ledgerman.services.items import ItemRegistry
        return ItemRegistry.get_item(item)


def status_for(balance: int, minimum_stock: int) -> StockStatus:
    """Classify a balance against a minimum stock threshold."""
    if balance <= 0:
        return StockStatus.OUT_OF_STOCK
    if balance <= minimum_stock:
        return StockStatus.LOW
    return StockStatus.ADEQUATE
