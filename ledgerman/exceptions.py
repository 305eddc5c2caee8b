"""
Exceptions for Ledgerman.

All errors are LedgerError with a structured code for programmatic handling.
The typed subclasses let callers map failures to responses without
inspecting codes.
"""

from typing import Any


class BaseError(Exception):
    """
    Exception carrying a machine-readable code and context data.

    Subclasses declare ``_default_messages`` keyed by code; an explicit
    ``message`` always wins.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.data = data
        self.message = message or self._default_messages.get(code, code)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.code!r}, {self.message!r})"


class LedgerError(BaseError):
    """
    Structured exception for ledger operations.

    Usage:
        try:
            ledger.record(rice, 'OUT', 1000)
        except LedgerError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.available} available")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'ITEM_NOT_FOUND': 'Item not found',
        'TRANSACTION_NOT_FOUND': 'Transaction not found',
        'SUPPLIER_NOT_FOUND': 'Supplier not found',
        'INVALID_QUANTITY': 'Quantity must be a positive integer',
        'INVALID_DIRECTION': 'Direction must be IN or OUT',
        'INVALID_DATE_RANGE': 'Start date must be before end date',
        'INVALID_FIELD': 'Field cannot be changed',
        'BLANK_NAME': 'Item name is required',
        'BLANK_UNIT': 'Unit is required',
        'INVALID_MINIMUM_STOCK': 'Minimum stock must be positive',
        'INSUFFICIENT_STOCK': 'Insufficient stock',
        'ALREADY_REVERSED': 'Transaction is already reversed',
        'CANNOT_REVERSE_REVERSAL': 'A reversal cannot itself be reversed',
        'NOT_REVERSED': 'Transaction is not reversed',
        'REVERSAL_MISSING': 'Reversal transaction not found',
        'TRANSACTION_REVERSED': 'Cannot update a reversed transaction',
        'REVERSAL_NOT_EDITABLE': 'Cannot update a reversal transaction',
        'DUPLICATE_NAME': 'Item with this name already exists',
        'ITEM_HAS_TRANSACTIONS': 'Cannot delete item with existing transactions',
    }

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'error': self.__class__.__name__,
            'code': self.code,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, float, bool, type(None))) else str(v)
                for k, v in self.data.items()
            }
        }


class NotFound(LedgerError):
    """An item, transaction or supplier reference does not resolve."""


class InvalidArgument(LedgerError):
    """Non-positive quantity, unknown direction, malformed date range."""


class InsufficientStock(LedgerError):
    """An outgoing effect would drive an item's balance below zero."""

    def __init__(self, available: int, requested: int, **data: Any):
        super().__init__(
            'INSUFFICIENT_STOCK',
            f"Insufficient stock! Available: {available}, Requested: {requested}",
            available=available,
            requested=requested,
            **data,
        )


class InvalidState(LedgerError):
    """The transaction's reversal state does not allow the operation."""


class Conflict(LedgerError):
    """The registry refuses a write that clashes with existing data."""
