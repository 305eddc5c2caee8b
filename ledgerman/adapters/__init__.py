"""
Ledgerman Adapters.

Implementations of protocols for external systems.
"""

from ledgerman.adapters.suppliers import (
    get_supplier_validator,
    reset_supplier_validator,
)

__all__ = [
    "get_supplier_validator",
    "reset_supplier_validator",
]
