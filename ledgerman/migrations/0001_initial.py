"""
Initial migration for Ledgerman models.
"""

import datetime

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Ledgerman models: Item, StockTransaction."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='Name')),
                ('unit', models.CharField(help_text='Ex: sacks, liters, kg', max_length=50, verbose_name='Unit')),
                ('minimum_stock', models.PositiveIntegerField(help_text='Low stock when balance is at or under this value', verbose_name='Minimum stock')),
                ('description', models.CharField(blank=True, default='', max_length=500, verbose_name='Description')),
                ('damaged_quantity', models.PositiveIntegerField(default=0, help_text='Spoiled, broken or unusable units', verbose_name='Damaged quantity')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Item',
                'verbose_name_plural': 'Items',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='StockTransaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('direction', models.CharField(choices=[('IN', 'In'), ('OUT', 'Out')], max_length=10, verbose_name='Direction')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantity')),
                ('transaction_date', models.DateField(db_index=True, default=datetime.date.today, help_text='When the movement happened (not when it was recorded)', verbose_name='Transaction date')),
                ('reference_number', models.CharField(blank=True, default='', help_text='Ex: PO number, requisition number', max_length=100, verbose_name='Reference number')),
                ('notes', models.CharField(blank=True, default='', max_length=500, verbose_name='Notes')),
                ('recorded_by', models.CharField(blank=True, default='', max_length=100, verbose_name='Recorded by')),
                ('supplier_id', models.PositiveIntegerField(blank=True, null=True, verbose_name='Supplier ID')),
                ('reversed', models.BooleanField(default=False, verbose_name='Reversed')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transactions', to='ledgerman.item', verbose_name='Item')),
                ('original', models.OneToOneField(blank=True, help_text='Set on reversal records: the transaction being nullified', null=True, on_delete=django.db.models.deletion.CASCADE, related_name='reversal', to='ledgerman.stocktransaction', verbose_name='Reverses')),
            ],
            options={
                'verbose_name': 'Stock transaction',
                'verbose_name_plural': 'Stock transactions',
                'ordering': ['transaction_date', 'created_at', 'id'],
            },
        ),
        # Indexes
        migrations.AddIndex(
            model_name='stocktransaction',
            index=models.Index(fields=['item', 'direction'], name='ledgerman_txn_item_dir_idx'),
        ),
        migrations.AddIndex(
            model_name='stocktransaction',
            index=models.Index(fields=['item', 'transaction_date'], name='ledgerman_txn_item_date_idx'),
        ),
        migrations.AddConstraint(
            model_name='stocktransaction',
            constraint=models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='ledgerman_transaction_quantity_positive'),
        ),
    ]
