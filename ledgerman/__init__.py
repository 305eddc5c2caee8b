"""
Ledgerman — Stock transaction ledger.

Items carry a minimum stock; every movement is a ledger entry; balances
are always derived from the ledger.

Usage:
    from ledgerman import ledger, LedgerError

    t1 = ledger.record(rice, 'IN', 100)
    ledger.record(rice, 'OUT', 30)
    ledger.balance(rice)  # 70
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from ledgerman.service import Ledger
        return Ledger
    elif name in ('LedgerError', 'NotFound', 'InvalidArgument',
                  'InsufficientStock', 'InvalidState', 'Conflict'):
        from ledgerman import exceptions
        return getattr(exceptions, name)
    elif name == 'Item':
        from ledgerman.models.item import Item
        return Item
    elif name == 'StockTransaction':
        from ledgerman.models.transaction import StockTransaction
        return StockTransaction
    elif name == 'Direction':
        from ledgerman.models.enums import Direction
        return Direction
    elif name == 'StockStatus':
        from ledgerman.models.enums import StockStatus
        return StockStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'LedgerError',
    'NotFound',
    'InvalidArgument',
    'InsufficientStock',
    'InvalidState',
    'Conflict',
    'Item',
    'StockTransaction',
    'Direction',
    'StockStatus',
]

__version__ = '0.1.0'
