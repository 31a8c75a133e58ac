"""
engine.py - Transaction Replay Engine

LedgerEngine is the central state manager of the batch ledger.
It is the only object that mutates account state.

Key responsibilities:
    - Applies records strictly in input order, one at a time
    - Creates client accounts lazily, in first-seen order
    - Retains the full record history for dispute/resolve/chargeback lookups
    - Tracks active disputes
    - Always records rejections - skipped records never fail the batch
"""

from __future__ import annotations
import sys
from typing import Dict, Iterable, List, Optional, Tuple

from .core import (
    AccountState, ApplyResult, TransactionKind, TransactionRecord,
    LedgerError, AccountLocked, UnknownTransaction, ForeignTransaction,
)
from .disputes import DisputeTracker
from .handlers import DEFAULT_HANDLERS, Handler


class LedgerEngine:
    """
    Replays client transactions into final account states.

    Design Principles:
        - Order is significant: records are applied in the order given, and
          reference lookups only see records that came earlier.
        - Locked is terminal: once an account is charged back, every later
          record for that client is rejected.
        - Never abort on one bad record: rejected records leave state untouched
          and are logged in `rejections` (and printed when verbose).

    Thread Safety:
        Not thread-safe. Each thread should maintain its own LedgerEngine instance.

    Example:
        engine = LedgerEngine(verbose=False)
        accounts = engine.process([
            TransactionRecord(TransactionKind.DEPOSIT, 1, 1, Amount.parse("5.0")),
            TransactionRecord(TransactionKind.WITHDRAW, 1, 2, Amount.parse("1.5")),
        ])
    """

    def __init__(
        self,
        verbose: bool = True,
        strict: bool = False,
        same_client_disputes: bool = False,
    ):
        """
        Create an engine.

        Args:
            verbose: Print a diagnostic to stderr for each rejected record (default: True)
            strict: Raise the LedgerError instead of skipping a rejected record (default: False)
            same_client_disputes: Only allow disputes, resolves and chargebacks of the
                client's own transactions (default: False, any client's transaction)
        """
        self.verbose = verbose
        self.strict = strict
        self.same_client_disputes = same_client_disputes
        self._handlers: Dict[TransactionKind, Handler] = dict(DEFAULT_HANDLERS)
        # Insertion order of the dict is first-seen order of clients
        self._accounts: Dict[int, AccountState] = {}
        self._history: List[TransactionRecord] = []
        # tx_id -> position of the first deposit or withdrawal with an amount
        self._positions_by_tx: Dict[int, int] = {}
        self._disputes = DisputeTracker()
        self.rejections: List[Tuple[TransactionRecord, str]] = []

    # ========================================================================
    # READ-ONLY ACCESS
    # ========================================================================

    @property
    def accounts(self) -> List[AccountState]:
        """All accounts in the order their clients were first seen."""
        return list(self._accounts.values())

    def get_account(self, client_id: int) -> Optional[AccountState]:
        return self._accounts.get(client_id)

    @property
    def history(self) -> Tuple[TransactionRecord, ...]:
        """Every record applied so far, rejected ones included."""
        return tuple(self._history)

    def get_transaction(self, tx_id: int) -> Optional[TransactionRecord]:
        """Return the first deposit or withdrawal seen with this transaction id, if any."""
        position = self._positions_by_tx.get(tx_id)
        if position is None:
            return None
        return self._history[position]

    @property
    def disputes(self) -> DisputeTracker:
        return self._disputes

    def is_disputed(self, tx_id: int) -> bool:
        return self._disputes.is_disputed(tx_id)

    def resolve_reference(self, record: TransactionRecord) -> TransactionRecord:
        """
        Find the transaction a dispute, resolve or chargeback refers to.

        Args:
            record: The referencing record

        Returns:
            The earlier record with the same tx_id, which carries an amount

        Raises:
            UnknownTransaction: If no earlier record with an amount has this id
            ForeignTransaction: If same_client_disputes is set and the record
                belongs to another client
        """
        target = self.get_transaction(record.tx_id)
        if target is None:
            raise UnknownTransaction(f"tx {record.tx_id} not found")
        if self.same_client_disputes and target.client_id != record.client_id:
            raise ForeignTransaction(
                f"tx {record.tx_id} belongs to client {target.client_id}, "
                f"not {record.client_id}"
            )
        return target

    # ========================================================================
    # PROCESSING (Mutating)
    # ========================================================================

    def apply(self, record: TransactionRecord) -> ApplyResult:
        """
        Apply a single record.

        The client's account is created first if needed, even if the record
        is then rejected. The record is appended to history whatever the
        outcome, so later references can find it.

        Args:
            record: TransactionRecord to apply

        Returns:
            ApplyResult.APPLIED if the account was updated
            ApplyResult.REJECTED if the record was skipped

        Raises:
            LedgerError: Only when strict is set, for any rejected record
        """
        account = self._account_for(record.client_id)
        try:
            if account.locked:
                raise AccountLocked(f"client {account.client_id} is locked")
            handler: Handler = self._handlers[record.kind]
            handler(self, account, record)
        except LedgerError as e:
            self._reject(record, str(e))
            if self.strict:
                raise
            return ApplyResult.REJECTED
        finally:
            self._append_history(record)
        return ApplyResult.APPLIED

    def process(self, records: Iterable[TransactionRecord]) -> List[AccountState]:
        """
        Apply every record in order and return the resulting accounts.

        Args:
            records: Ordered records; any iterable, consumed once

        Returns:
            Accounts in first-seen order
        """
        for record in records:
            self.apply(record)
        return self.accounts

    def _account_for(self, client_id: int) -> AccountState:
        account = self._accounts.get(client_id)
        if account is None:
            account = AccountState(client_id)
            self._accounts[client_id] = account
        return account

    def _append_history(self, record: TransactionRecord) -> None:
        # Only deposits and withdrawals with an amount can be referenced
        if record.kind.carries_amount and record.amount is not None:
            self._positions_by_tx.setdefault(record.tx_id, len(self._history))
        self._history.append(record)

    def _reject(self, record: TransactionRecord, reason: str) -> None:
        self.rejections.append((record, reason))
        if self.verbose:
            print(f"✗ REJECTED: {record!r}: {reason}", file=sys.stderr)


def process_transactions(
    records: Iterable[TransactionRecord],
    **kwargs,
) -> List[AccountState]:
    """
    Replay records through a fresh LedgerEngine.

    Args:
        records: Ordered records
        **kwargs: Passed to LedgerEngine (verbose, strict, same_client_disputes)

    Returns:
        Final accounts in first-seen order
    """
    return LedgerEngine(**kwargs).process(records)
