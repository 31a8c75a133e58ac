"""
batchledger - Batch Client Ledger Engine

Replays an ordered batch of client transactions (deposits, withdrawals,
disputes, resolves, chargebacks) into final per-client account states.

Usage:
    from batchledger import LedgerEngine, read_transactions, write_accounts

    engine = LedgerEngine()
    accounts = engine.process(read_transactions("transactions.csv"))
    write_accounts(accounts)

    # Or build records directly
    from batchledger import Amount, TransactionKind, TransactionRecord

    engine = LedgerEngine(verbose=False)
    engine.apply(TransactionRecord(TransactionKind.DEPOSIT, 1, 1, Amount.parse("5.0")))
    engine.apply(TransactionRecord(TransactionKind.DISPUTE, 1, 1))
    engine.get_account(1).held   # Amount(5.0000)
"""

# Core types
from .core import (
    Amount,
    TransactionKind,
    TransactionRecord,
    AccountState,
    ApplyResult,
    LedgerError,
    MissingAmount,
    InsufficientFunds,
    UnknownTransaction,
    NotDisputed,
    AlreadyDisputed,
    AccountLocked,
    ForeignTransaction,
    InvalidTransaction,
    MalformedRecord,
    AMOUNT_PLACES,
    AMOUNT_SCALE,
)

# Disputes
from .disputes import DisputeTracker

# Handlers
from .handlers import (
    handle_deposit,
    handle_withdraw,
    handle_dispute,
    handle_resolve,
    handle_chargeback,
    handle_invalid,
    DEFAULT_HANDLERS,
)

# Engine
from .engine import LedgerEngine, process_transactions

# Input / output
from .io import (
    ACCOUNTS_HEADER,
    parse_record,
    read_transactions,
    format_account,
    render_accounts,
    write_accounts,
)

__all__ = [
    # Core
    'Amount', 'TransactionKind', 'TransactionRecord', 'AccountState', 'ApplyResult',
    'LedgerError', 'MissingAmount', 'InsufficientFunds', 'UnknownTransaction',
    'NotDisputed', 'AlreadyDisputed', 'AccountLocked', 'ForeignTransaction',
    'InvalidTransaction', 'MalformedRecord',
    'AMOUNT_PLACES', 'AMOUNT_SCALE',
    # Disputes
    'DisputeTracker',
    # Handlers
    'handle_deposit', 'handle_withdraw', 'handle_dispute', 'handle_resolve',
    'handle_chargeback', 'handle_invalid', 'DEFAULT_HANDLERS',
    # Engine
    'LedgerEngine', 'process_transactions',
    # Input / output
    'ACCOUNTS_HEADER', 'parse_record', 'read_transactions',
    'format_account', 'render_accounts', 'write_accounts',
]

__version__ = '1.0.0'
