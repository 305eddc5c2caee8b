"""
Ledgerman Models.

Core models for the stock ledger:
- Item: What is stocked (threshold, damage counter)
- StockTransaction: Ledger of IN/OUT movements, reversals included
"""

from ledgerman.models.enums import Direction, StockStatus
from ledgerman.models.item import Item
from ledgerman.models.transaction import StockTransaction

__all__ = [
    'Direction',
    'StockStatus',
    'Item',
    'StockTransaction',
]
