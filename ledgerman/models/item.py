"""
Item model — What is stocked.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Item(models.Model):
    """
    Stocked item (Rice, Beans, Cooking Oil...).

    The balance is NOT a field: it is always derived from the ledger.
    See ledgerman.services.balances.
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_('Name'),
    )
    unit = models.CharField(
        max_length=50,
        verbose_name=_('Unit'),
        help_text=_('Ex: sacks, liters, kg'),
    )
    minimum_stock = models.PositiveIntegerField(
        verbose_name=_('Minimum stock'),
        help_text=_('Low stock when balance is at or under this value'),
    )
    description = models.CharField(
        max_length=500,
        blank=True,
        default='',
        verbose_name=_('Description'),
    )
    damaged_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Damaged quantity'),
        help_text=_('Spoiled, broken or unusable units'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Item')
        verbose_name_plural = _('Items')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
