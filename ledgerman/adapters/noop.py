"""
Noop Supplier Validator — Stub adapter for development and testing.

Usage in settings.py:
    LEDGERMAN = {
        "SUPPLIER_VALIDATOR": "ledgerman.adapters.noop.NoopSupplierValidator",
    }

WARNING: Do NOT use in production. Every supplier id is accepted,
including ids that do not exist.
"""

from __future__ import annotations

from ledgerman.protocols.supplier import SupplierValidationResult


class NoopSupplierValidator:
    """
    No-operation supplier validator.

    Implements the ``SupplierValidator`` protocol without any external
    dependencies.
    """

    def validate_supplier(self, supplier_id: int) -> SupplierValidationResult:
        """Always valid."""
        return SupplierValidationResult(valid=True, supplier_id=supplier_id)
