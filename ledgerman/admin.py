"""
Ledgerman Admin.

Provides:
- Item: list + edit, with derived balance and stock status
- StockTransaction: read-only audit trail with "reverse" action
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from ledgerman.exceptions import LedgerError
from ledgerman.models import Item, StockTransaction

logger = logging.getLogger(__name__)


# =========================================================================
# ITEM ADMIN
# =========================================================================

@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Item admin — editable. Balance is derived, never edited."""

    list_display = ['name', 'unit', 'minimum_stock', 'balance_display',
                    'status_display', 'damaged_quantity']
    search_fields = ['name']
    readonly_fields = ['damaged_quantity', 'created_at', 'updated_at']

    def has_delete_permission(self, request, obj=None):
        # Deletion goes through ItemRegistry.delete_item (transaction check)
        return False

    @admin.display(description=_('Balance'))
    def balance_display(self, obj):
        from ledgerman import ledger
        return ledger.balance(obj)

    @admin.display(description=_('Status'))
    def status_display(self, obj):
        from ledgerman import ledger
        return ledger.stock_status(obj).label


# =========================================================================
# STOCK TRANSACTION ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockTransaction)
class StockTransactionAdmin(admin.ModelAdmin):
    """StockTransaction admin — read-only with reverse action."""

    list_display = ['id', 'transaction_date', 'item', 'direction', 'quantity',
                    'reference_number', 'recorded_by', 'reversed']
    list_filter = ['direction', 'reversed', 'transaction_date']
    search_fields = ['reference_number', 'notes', 'item__name']
    readonly_fields = ['item', 'direction', 'quantity', 'transaction_date',
                       'reference_number', 'notes', 'recorded_by', 'supplier_id',
                       'reversed', 'original', 'created_at', 'updated_at']
    date_hierarchy = 'transaction_date'
    actions = ['reverse_transactions']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description=_('Reverse selected transactions'))
    def reverse_transactions(self, request, queryset):
        from ledgerman import ledger

        count = 0
        for txn in queryset.filter(reversed=False, original__isnull=True):
            try:
                ledger.reverse(txn, reason='Reversed via admin',
                               reversed_by=request.user.get_username())
                count += 1
            except LedgerError as exc:
                logger.warning("reverse_transactions: failed to reverse %s: %s", txn.pk, exc)

        self.message_user(request, _('{count} transaction(s) reversed.').format(count=count))
