"""
Ledgerman Protocols.

Defines interfaces for external system integration.
"""

from ledgerman.protocols.supplier import (
    SupplierValidationResult,
    SupplierValidator,
)

__all__ = [
    "SupplierValidationResult",
    "SupplierValidator",
]
