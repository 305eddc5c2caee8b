"""
Enums for Ledgerman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Direction(models.TextChoices):
    """
    Direction of a stock movement.

    IN:  Stock received (purchase, donation, return).
    OUT: Stock consumed or issued.
    """
    IN = 'IN', _('In')
    OUT = 'OUT', _('Out')


class StockStatus(models.TextChoices):
    """Derived stock level of an item."""
    ADEQUATE = 'adequate', _('Adequate')          # Above minimum stock
    LOW = 'low', _('Low stock')                   # At or under minimum stock
    OUT_OF_STOCK = 'out_of_stock', _('Out of stock')  # Nothing left
