"""
Ledger queries — read-only operations for reports and screens.

All methods are classmethods and use no locking.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date

from ledgerman.exceptions import InvalidArgument, NotFound
from ledgerman.models.item import Item
from ledgerman.models.transaction import StockTransaction
from ledgerman.services.balances import LedgerBalances, status_for


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balance of one item at query time."""

    item_id: int
    item_name: str
    unit: str
    total_in: int
    total_out: int
    balance: int
    minimum_stock: int
    is_low_stock: bool
    status: str


class LedgerQueries:
    """Read-only ledger query methods."""

    @classmethod
    def get_transaction(cls, txn) -> StockTransaction:
        """Resolve a transaction, annotated with its item's current balance."""
        pk = getattr(txn, 'pk', txn)
        found = StockTransaction.objects.select_related('item').find_by_id(pk)
        if found is None:
            raise NotFound(
                'TRANSACTION_NOT_FOUND',
                f"Transaction not found with id: {pk}",
                transaction_id=pk,
            )
        found.balance_after = LedgerBalances.balance(found.item_id)
        return found

    @classmethod
    def history(cls, item=None, start: date | None = None,
                end: date | None = None) -> list[StockTransaction]:
        """
        Transactions with the running balance after each one.

        Running balances are accumulated per item in chronological order
        (transaction_date, created_at, id) and the list is returned newest
        first. With a date range, the running balance only covers the
        transactions inside the range.

        Args:
            item: Item instance or pk (None = all items)
            start: First transaction_date included
            end: Last transaction_date included

        Raises:
            NotFound('ITEM_NOT_FOUND'): Unknown item
            InvalidArgument('INVALID_DATE_RANGE'): start after end
        """
        if start is not None and end is not None and start > end:
            raise InvalidArgument('INVALID_DATE_RANGE', start=start, end=end)

        qs = StockTransaction.objects.between(start, end).select_related('item')
        if item is not None:
            from ledgerman.services.items import ItemRegistry
            qs = qs.for_item(ItemRegistry.get_item(item))

        running: dict[int, int] = defaultdict(int)
        rows = []
        for txn in qs.order_by('transaction_date', 'created_at', 'id'):
            running[txn.item_id] += txn.effect
            txn.balance_after = running[txn.item_id]
            rows.append(txn)

        rows.reverse()
        return rows

    @classmethod
    def snapshot(cls, item) -> BalanceSnapshot:
        total_in, total_out = LedgerBalances.totals(item)
        balance = total_in - total_out
        return BalanceSnapshot(
            item_id=item.pk,
            item_name=item.name,
            unit=item.unit,
            total_in=total_in,
            total_out=total_out,
            balance=balance,
            minimum_stock=item.minimum_stock,
            is_low_stock=balance <= item.minimum_stock,
            status=str(status_for(balance, item.minimum_stock)),
        )

    @classmethod
    def balance_report(cls) -> list[BalanceSnapshot]:
        """Balance snapshot of every item, by name."""
        return [cls.snapshot(item) for item in Item.objects.order_by('name')]

    @classmethod
    def low_stock_report(cls) -> list[BalanceSnapshot]:
        return [s for s in cls.balance_report() if s.is_low_stock]
