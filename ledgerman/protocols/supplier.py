"""
Supplier Validation Protocol — Interface for supplier lookups.

Ledgerman only stores supplier ids. The supplier directory lives in
another app, which implements this protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SupplierValidationResult:
    """Result of supplier validation."""

    valid: bool
    supplier_id: int
    name: str | None = None
    message: str | None = None


@runtime_checkable
class SupplierValidator(Protocol):
    """
    Protocol for supplier validation.

    Implementations tell Ledgerman whether a supplier id may be linked
    to a stock transaction.
    """

    def validate_supplier(self, supplier_id: int) -> SupplierValidationResult:
        """
        Validate that a supplier exists.

        Args:
            supplier_id: Supplier primary key in the external directory

        Returns:
            SupplierValidationResult with status and details
        """
        ...
