"""
Ledger Service — The single public interface for all ledger operations.

Usage:
    from ledgerman import ledger, LedgerError

    rice = ledger.create_item('Rice', 'sacks', minimum_stock=10)
    t1 = ledger.record(rice, 'IN', 100)
    ledger.record(rice, 'OUT', 30)
    ledger.balance(rice)          # 70
    ledger.reverse(t1, reason='Wrong delivery')
"""

from ledgerman.services.alerts import check_low_stock
from ledgerman.services.balances import LedgerBalances
from ledgerman.services.items import ItemRegistry
from ledgerman.services.queries import LedgerQueries
from ledgerman.services.transactions import LedgerTransactions


class Ledger(ItemRegistry, LedgerBalances, LedgerQueries, LedgerTransactions):
    """
    Single interface for all ledger operations.

    Items and transactions may be passed as instances or primary keys.

    IMPORTANT: record, edit, reverse and undo_reverse run in atomic
    transactions and lock the affected items. See
    ledgerman.services.transactions.
    """

    @classmethod
    def check_low_stock(cls, item=None):
        """(item, balance) pairs at or under minimum stock. Logs each one."""
        return check_low_stock(item)
