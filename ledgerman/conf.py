"""
Ledgerman configuration.

Usage in settings.py:
    LEDGERMAN = {
        "SUPPLIER_VALIDATOR": "suppliers.adapters.SupplierDirectoryValidator",
        "CASCADE_ITEM_DELETE": False,
        "REVERSAL_REFERENCE_PREFIX": "REV-",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class LedgermanSettings:
    """Ledgerman configuration settings."""

    # Supplier validation backend (dotted path, empty = accept any supplier id)
    SUPPLIER_VALIDATOR: str = ""

    # Delete an item's transactions along with it instead of refusing
    CASCADE_ITEM_DELETE: bool = False

    # Prefix of the reference number given to reversal records
    REVERSAL_REFERENCE_PREFIX: str = "REV-"


def get_ledgerman_settings() -> LedgermanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "LEDGERMAN", {})
    return LedgermanSettings(**{
        k: v for k, v in user_settings.items()
        if k in LedgermanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_ledgerman_settings(), name)


ledgerman_settings = _LazySettings()
