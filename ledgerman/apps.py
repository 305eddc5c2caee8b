"""Django app configuration for Ledgerman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class LedgermanConfig(AppConfig):
    """Configuration for Ledgerman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ledgerman"
    verbose_name = _("Stock Ledger")
