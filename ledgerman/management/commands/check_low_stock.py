"""
Management command to list items at or under their minimum stock.

Usage:
    python manage.py check_low_stock
    python manage.py check_low_stock --item 7
"""

from django.core.management.base import BaseCommand, CommandError

from ledgerman.exceptions import NotFound
from ledgerman.services.alerts import check_low_stock
from ledgerman.services.items import ItemRegistry


class Command(BaseCommand):
    """Low stock report command."""

    help = 'Lists items whose balance is at or under their minimum stock'

    def add_arguments(self, parser):
        parser.add_argument(
            '--item',
            type=int,
            help='Only check this item id'
        )

    def handle(self, *args, **options):
        item = None
        if options['item'] is not None:
            try:
                item = ItemRegistry.get_item(options['item'])
            except NotFound as e:
                raise CommandError(e.message) from e

        triggered = check_low_stock(item)

        for item, balance in triggered:
            self.stdout.write(
                f'{item.name}: {balance} {item.unit} (minimum {item.minimum_stock})'
            )

        if triggered:
            self.stdout.write(
                self.style.WARNING(f'{len(triggered)} item(s) low on stock')
            )
        else:
            self.stdout.write(self.style.SUCCESS('All items above minimum stock'))
