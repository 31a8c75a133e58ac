"""
handlers.py - Per-kind transaction handlers

Simple functions that apply one TransactionRecord to one AccountState.
Each handler either mutates the account and returns, or raises a
LedgerError subclass before touching anything.

- No handler classes, just functions
- Dict of functions keyed by TransactionKind (DEFAULT_HANDLERS)
- Lock checks, history and diagnostics live in the engine
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Dict

from .core import (
    Amount, AccountState, TransactionKind, TransactionRecord,
    MissingAmount, InsufficientFunds, AlreadyDisputed, NotDisputed,
    InvalidTransaction,
)

if TYPE_CHECKING:
    from .engine import LedgerEngine


Handler = Callable[["LedgerEngine", AccountState, TransactionRecord], None]


def _own_amount(record: TransactionRecord) -> Amount:
    if record.amount is None:
        raise MissingAmount(f"no amount found for {record.kind.value} tx {record.tx_id}")
    return record.amount


# ============================================================================
# HANDLER FUNCTIONS
# ============================================================================

def handle_deposit(engine: LedgerEngine, account: AccountState, record: TransactionRecord) -> None:
    """Credit the available balance."""
    account.available = account.available + _own_amount(record)


def handle_withdraw(engine: LedgerEngine, account: AccountState, record: TransactionRecord) -> None:
    """Debit the available balance unless it would go negative."""
    amount = _own_amount(record)
    remaining = account.available - amount
    if remaining.is_negative():
        raise InsufficientFunds(
            f"client {account.client_id}: available {account.available} < {amount}"
        )
    account.available = remaining


def handle_dispute(engine: LedgerEngine, account: AccountState, record: TransactionRecord) -> None:
    """
    Move the referenced transaction's amount from available to held.

    The available balance may go negative if the disputed funds were
    already withdrawn.
    """
    target = engine.resolve_reference(record)
    if not engine.disputes.open(target.tx_id):
        raise AlreadyDisputed(f"tx {target.tx_id} is already under dispute")
    account.available = account.available - target.amount
    account.held = account.held + target.amount


def handle_resolve(engine: LedgerEngine, account: AccountState, record: TransactionRecord) -> None:
    """Release held funds of a disputed transaction back to available."""
    target = engine.resolve_reference(record)
    if not engine.disputes.close(target.tx_id):
        raise NotDisputed(f"tx {target.tx_id} is not under dispute")
    account.available = account.available + target.amount
    account.held = account.held - target.amount


def handle_chargeback(engine: LedgerEngine, account: AccountState, record: TransactionRecord) -> None:
    """Withdraw held funds of a disputed transaction and lock the account."""
    target = engine.resolve_reference(record)
    if not engine.disputes.close(target.tx_id):
        raise NotDisputed(f"tx {target.tx_id} is not under dispute")
    account.held = account.held - target.amount
    account.locked = True


def handle_invalid(engine: LedgerEngine, account: AccountState, record: TransactionRecord) -> None:
    raise InvalidTransaction(f"invalid transaction found (tx {record.tx_id})")


# ============================================================================
# DEFAULT HANDLER REGISTRY
# ============================================================================

DEFAULT_HANDLERS: Dict[TransactionKind, Handler] = {
    TransactionKind.DEPOSIT: handle_deposit,
    TransactionKind.WITHDRAW: handle_withdraw,
    TransactionKind.DISPUTE: handle_dispute,
    TransactionKind.RESOLVE: handle_resolve,
    TransactionKind.CHARGEBACK: handle_chargeback,
    TransactionKind.INVALID: handle_invalid,
}
