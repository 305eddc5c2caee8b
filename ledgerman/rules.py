"""
Ledger rules — isolated, testable, reusable.

Pure functions over balances and postings. The transaction engine reads
balances from the database and hands them to these helpers; nothing here
touches the ORM, so every invariant can be checked in isolation.

Examples:
    - IN 100 has signed effect +100, OUT 30 has -30
    - Editing IN 100 -> IN 80 with balance 100 projects 80
    - Moving IN 100 from item A (balance 100) to item B projects A=0, B=+100
"""

from dataclasses import dataclass

from ledgerman.exceptions import InsufficientStock, InvalidArgument
from ledgerman.models.enums import Direction


@dataclass(frozen=True)
class Posting:
    """Direction and quantity of a ledger entry, detached from storage."""

    direction: str
    quantity: int

    @property
    def effect(self) -> int:
        return signed_effect(self.direction, self.quantity)


@dataclass(frozen=True)
class Active:
    """Transaction counts towards the balance and has no live reversal."""


@dataclass(frozen=True)
class Reversed:
    """Transaction has been nullified by the reversal ``reversal_id``."""

    reversal_id: int | None


TransactionState = Active | Reversed


def parse_direction(direction) -> str:
    """Normalize ``direction`` to a Direction value or raise InvalidArgument."""
    value = str(getattr(direction, 'value', direction) or '').upper()
    if value not in Direction.values:
        raise InvalidArgument('INVALID_DIRECTION', direction=direction)
    return value


def validate_quantity(quantity) -> int:
    """Quantities are strictly positive integers."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidArgument('INVALID_QUANTITY', requested=quantity)
    return quantity


def signed_effect(direction: str, quantity: int) -> int:
    """+quantity for IN, -quantity for OUT."""
    return quantity if direction == Direction.IN else -quantity


def opposite(direction: str) -> str:
    return Direction.OUT if direction == Direction.IN else Direction.IN


def check_withdrawal(available: int, requested: int, **context) -> int:
    """
    Ensure removing ``requested`` units from ``available`` stays >= 0.

    A non-positive ``requested`` adds stock and always passes.

    Returns:
        The projected balance.

    Raises:
        InsufficientStock: reporting both amounts.
    """
    projected = available - requested
    if requested > 0 and projected < 0:
        raise InsufficientStock(available=available, requested=requested, **context)
    return projected


def project_record(balance: int, new: Posting, **context) -> int:
    """Balance after freshly applying ``new``."""
    return check_withdrawal(balance, -new.effect, **context)


def project_same_item_edit(balance: int, old: Posting, new: Posting, **context) -> int:
    """Balance after replacing ``old`` with ``new`` on the same item."""
    return check_withdrawal(balance, old.effect - new.effect, **context)


def project_cross_item_edit(old_balance: int, new_balance: int,
                            old: Posting, new: Posting) -> tuple[int, int]:
    """
    Balances of (old item, new item) after moving a posting across items.

    The old item loses ``old``; the new item gains ``new``. Each side is
    checked on its own.
    """
    return (
        check_withdrawal(old_balance, old.effect, side='old_item'),
        check_withdrawal(new_balance, -new.effect, side='new_item'),
    )


def project_reverse(balance: int, original: Posting, **context) -> int:
    """Balance after posting the counter-entry of ``original``."""
    return check_withdrawal(balance, original.effect, **context)


def project_undo_reverse(balance: int, reversal: Posting, **context) -> int:
    """Balance after deleting ``reversal``."""
    return check_withdrawal(balance, reversal.effect, **context)


def state_of(txn) -> TransactionState:
    """
    Tagged state of a transaction.

    Args:
        txn: object with ``reversed`` and an optional ``reversal`` link
    """
    if not txn.reversed:
        return Active()
    reversal = getattr(txn, 'reversal_record', None)
    return Reversed(reversal_id=reversal.pk if reversal is not None else None)
