"""
Ledger services — modular organization of ledger operations.

    from ledgerman.services import (
        ItemRegistry, LedgerBalances, LedgerQueries, LedgerTransactions,
    )
"""

from ledgerman.services.balances import LedgerBalances
from ledgerman.services.items import ItemRegistry
from ledgerman.services.queries import BalanceSnapshot, LedgerQueries
from ledgerman.services.transactions import LedgerTransactions

__all__ = [
    'BalanceSnapshot',
    'ItemRegistry',
    'LedgerBalances',
    'LedgerQueries',
    'LedgerTransactions',
]
