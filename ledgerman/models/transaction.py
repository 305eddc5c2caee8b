"""
StockTransaction model — Ledger of stock movements.
"""

from datetime import date

from django.db import models
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import Direction


class StockTransactionQuerySet(models.QuerySet):
    """Ledger store queries: aggregates and lookups used by the engine."""

    def for_item(self, item):
        """Filter transactions of one item (instance or pk)."""
        return self.filter(item_id=getattr(item, 'pk', item))

    def between(self, start: date | None = None, end: date | None = None):
        """Filter by transaction_date, both bounds inclusive."""
        qs = self.all()
        if start is not None:
            qs = qs.filter(transaction_date__gte=start)
        if end is not None:
            qs = qs.filter(transaction_date__lte=end)
        return qs

    def sum_quantity(self, item, direction: str) -> int:
        """Total quantity moved in ``direction`` for an item (0 if none)."""
        return self.for_item(item).filter(direction=direction).aggregate(
            t=Coalesce(Sum('quantity'), 0, output_field=models.IntegerField())
        )['t']

    def find_by_id(self, pk):
        return self.filter(pk=pk).first()

    def find_reversal_of(self, pk):
        """The reversal record pointing at transaction ``pk``, if any."""
        return self.filter(original_id=pk).first()


class StockTransaction(models.Model):
    """
    Record of one stock movement.

    Rules:
    - quantity is always positive; direction gives the sign
    - only the transaction engine writes here (ledgerman.services.transactions)
    - corrections are reversals (new counter-record) or validated edits
    - a reversal is deleted only by undo_reverse
    """

    item = models.ForeignKey(
        'ledgerman.Item',
        on_delete=models.PROTECT,
        related_name='transactions',
        verbose_name=_('Item'),
    )
    direction = models.CharField(
        max_length=10,
        choices=Direction.choices,
        verbose_name=_('Direction'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))

    transaction_date = models.DateField(
        default=date.today,
        db_index=True,
        verbose_name=_('Transaction date'),
        help_text=_('When the movement happened (not when it was recorded)'),
    )
    reference_number = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Reference number'),
        help_text=_('Ex: PO number, requisition number'),
    )
    notes = models.CharField(max_length=500, blank=True, default='', verbose_name=_('Notes'))
    recorded_by = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Recorded by'))

    # External supplier (referenced by id only)
    supplier_id = models.PositiveIntegerField(null=True, blank=True, verbose_name=_('Supplier ID'))

    reversed = models.BooleanField(default=False, verbose_name=_('Reversed'))
    original = models.OneToOneField(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='reversal',
        verbose_name=_('Reverses'),
        help_text=_('Set on reversal records: the transaction being nullified'),
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockTransactionQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock transaction')
        verbose_name_plural = _('Stock transactions')
        ordering = ['transaction_date', 'created_at', 'id']
        indexes = [
            models.Index(fields=['item', 'direction'], name='ledgerman_txn_item_dir_idx'),
            models.Index(fields=['item', 'transaction_date'], name='ledgerman_txn_item_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='ledgerman_transaction_quantity_positive',
            ),
        ]

    @property
    def effect(self) -> int:
        """Signed quantity: positive for IN, negative for OUT."""
        return self.quantity if self.direction == Direction.IN else -self.quantity

    @property
    def is_reversal(self) -> bool:
        return self.original_id is not None

    @property
    def reversal_record(self):
        """The live reversal of this transaction, or None."""
        try:
            return self.reversal
        except StockTransaction.DoesNotExist:
            return None

    def as_dict(self) -> dict:
        """Serialize to dict, including balance_after when annotated."""
        data = {
            'id': self.pk,
            'item_id': self.item_id,
            'item_name': self.item.name,
            'direction': self.direction,
            'quantity': self.quantity,
            'transaction_date': self.transaction_date.isoformat(),
            'reference_number': self.reference_number,
            'notes': self.notes,
            'recorded_by': self.recorded_by,
            'supplier_id': self.supplier_id,
            'reversed': self.reversed,
            'original_transaction_id': self.original_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        if hasattr(self, 'balance_after'):
            data['balance_after'] = self.balance_after
        return data

    def __str__(self) -> str:
        signal = '+' if self.direction == Direction.IN else '-'
        return f"{signal}{self.quantity} {self.item} | {self.transaction_date}"
