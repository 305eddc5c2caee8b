"""
Low stock alerts — check items against their minimum stock.

Usage:
    from ledgerman.services.alerts import check_low_stock

    # Run periodically (celery beat, cron) or after stock changes
    triggered = check_low_stock()
    # Returns list of (Item, current_balance) tuples
"""

import logging

from ledgerman.models.item import Item
from ledgerman.services.balances import LedgerBalances

logger = logging.getLogger('ledgerman')


def check_low_stock(item=None) -> list[tuple[Item, int]]:
    """
    Return items whose balance is at or under their minimum stock.

    Args:
        item: Optional item (instance or pk) to check (None = all).

    Returns:
        List of (item, current_balance) tuples for triggered items.
    """
    qs = Item.objects.order_by('name')
    if item is not None:
        qs = qs.filter(pk=getattr(item, 'pk', item))

    triggered = []
    for candidate in qs:
        balance = LedgerBalances.balance(candidate)
        if balance <= candidate.minimum_stock:
            triggered.append((candidate, balance))
            logger.warning(
                "ledger.low_stock",
                extra={
                    "item_id": candidate.pk,
                    "item_name": candidate.name,
                    "minimum_stock": candidate.minimum_stock,
                    "balance": balance,
                },
            )

    return triggered
