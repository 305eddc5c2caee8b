"""
Ledgerman supplier adapter — loads the configured SupplierValidator.

Usage:
    from ledgerman.adapters import get_supplier_validator

    validator = get_supplier_validator()
    if validator is not None:
        result = validator.validate_supplier(7)

Settings:
    LEDGERMAN = {
        "SUPPLIER_VALIDATOR": "suppliers.adapters.SupplierDirectoryValidator",
    }

If SUPPLIER_VALIDATOR is empty, get_supplier_validator() returns None and
supplier ids are stored without validation.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from ledgerman.conf import ledgerman_settings
from ledgerman.protocols.supplier import SupplierValidator

logger = logging.getLogger(__name__)


# Cached validator instance
_lock = threading.Lock()
_supplier_validator: SupplierValidator | None = None


def get_supplier_validator() -> SupplierValidator | None:
    """
    Return the configured supplier validator, or None when disabled.

    Raises:
        ImproperlyConfigured: If the configured path cannot be imported or
            does not implement SupplierValidator
    """
    global _supplier_validator

    validator_path = ledgerman_settings.SUPPLIER_VALIDATOR
    if not validator_path:
        return None

    if _supplier_validator is None:
        with _lock:
            if _supplier_validator is None:  # double-checked
                try:
                    validator_class = import_string(validator_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import supplier validator '{validator_path}': {e}"
                    ) from e

                validator = validator_class()
                if not isinstance(validator, SupplierValidator):
                    raise ImproperlyConfigured(
                        f"'{validator_path}' does not implement SupplierValidator"
                    )
                _supplier_validator = validator
                logger.debug("Loaded supplier validator: %s", validator_path)

    return _supplier_validator


def reset_supplier_validator() -> None:
    """Reset the cached validator. Useful for testing."""
    global _supplier_validator
    _supplier_validator = None
