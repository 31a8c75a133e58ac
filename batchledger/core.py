"""
Core types for the batch ledger engine.

This module provides the foundational data structures used by the engine:
1. Amount: fixed-point monetary value (four decimal places)
2. TransactionKind / TransactionRecord: immutable input transactions
3. AccountState: per-client balances and lock flag
4. ApplyResult and the LedgerError exception family

Nothing in this module knows about history or disputes. The engine
(engine.py) is the only place where account state is mutated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
import re
from typing import Optional


# ============================================================================
# CONSTANTS
# ============================================================================

# Number of fractional digits carried by every Amount.
AMOUNT_PLACES = 4

# Scale between the whole part and the fractional part (10 ** AMOUNT_PLACES).
AMOUNT_SCALE = 10000

# Ranges of the identifier fields carried by input records.
MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1

# Whole part of an amount must fit a signed 64-bit integer.
MIN_WHOLE = -(2**63)
MAX_WHOLE = 2**63 - 1

_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")
_DIGITS = re.compile(r"[0-9]+")


# ============================================================================
# ENUMS
# ============================================================================

class TransactionKind(Enum):
    """
    Closed set of transaction kinds understood by the engine.

    DEPOSIT/WITHDRAW carry an amount of their own. DISPUTE/RESOLVE/CHARGEBACK
    reference an earlier transaction by id and reuse its amount. INVALID is the
    catch-all for unrecognized input tokens.
    """
    DEPOSIT = "deposit"
    WITHDRAW = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"
    INVALID = "invalid"

    @classmethod
    def from_token(cls, token: str) -> TransactionKind:
        """Map an input token (e.g. "withdrawal") to a kind; unknown tokens are INVALID."""
        token = token.strip()
        for kind in cls:
            if kind is not cls.INVALID and kind.value == token:
                return kind
        return cls.INVALID

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionKind.DEPOSIT, TransactionKind.WITHDRAW)

    @property
    def is_reference(self) -> bool:
        return self in (
            TransactionKind.DISPUTE,
            TransactionKind.RESOLVE,
            TransactionKind.CHARGEBACK,
        )


class ApplyResult(Enum):
    """
    Outcome of applying one record to the engine.

    APPLIED: The record mutated account state.
    REJECTED: The record was skipped (insufficient funds, unknown reference,
              locked account, invalid kind, ...). State is unchanged.
    """
    APPLIED = "applied"
    REJECTED = "rejected"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class MissingAmount(LedgerError):
    """Raised when a deposit or withdrawal carries no amount."""
    pass


class InsufficientFunds(LedgerError):
    """Raised when a withdrawal would drive the available balance below zero."""
    pass


class UnknownTransaction(LedgerError):
    """Raised when a reference names a transaction id that is not in history or has no amount."""
    pass


class NotDisputed(LedgerError):
    """Raised when a resolve or chargeback targets a transaction that is not under dispute."""
    pass


class AlreadyDisputed(LedgerError):
    """Raised when a dispute targets a transaction that is already under dispute."""
    pass


class AccountLocked(LedgerError):
    """Raised when a record targets an account frozen by a chargeback."""
    pass


class ForeignTransaction(LedgerError):
    """Raised when a reference targets another client's transaction and cross-client lookups are disabled."""
    pass


class InvalidTransaction(LedgerError):
    """Raised when a record has an unrecognized transaction kind."""
    pass


class MalformedRecord(LedgerError):
    """Raised when an input row cannot be mapped to a TransactionRecord."""
    pass


# ============================================================================
# AMOUNT
# ============================================================================

@dataclass(frozen=True, slots=True, order=True)
class Amount:
    """
    Fixed-point monetary amount with four decimal places.

    The value is held as a single scaled integer (value * AMOUNT_SCALE), so
    "1.5" and "1.50" are the same amount and comparisons are by value.
    The conventional whole/fraction split is exposed as read-only properties.

    Attributes:
        units: The amount in 1/AMOUNT_SCALE steps.

    Example:
        >>> Amount.parse("5.0") + Amount.parse("3.25")
        Amount(8.2500)
        >>> str(Amount.parse("1.05"))
        '1.0500'
    """
    units: int = 0

    def __post_init__(self):
        if not isinstance(self.units, int) or isinstance(self.units, bool):
            raise ValueError(f"Amount units must be int, got {type(self.units)}")

    @classmethod
    def zero(cls) -> Amount:
        return cls(0)

    @classmethod
    def from_whole(cls, whole: int) -> Amount:
        """Create an amount with no fractional part."""
        return cls(whole * AMOUNT_SCALE)

    @classmethod
    def parse(cls, text: str) -> Amount:
        """
        Parse a decimal numeral such as "12", "-3.5" or "0.0001".

        Parsing never fails: a whole part that is not a signed 64-bit integer
        counts as 0, and a fractional part that is not a plain digit string
        counts as 0. Fractional digits beyond AMOUNT_PLACES are truncated.
        Anything after a second decimal point is ignored.

        Args:
            text: The numeral to parse

        Returns:
            The parsed Amount
        """
        text = text.strip()
        whole_text, _, fraction_text = text.partition(".")
        fraction_text = fraction_text.split(".", 1)[0]

        negative = False
        whole = 0
        if _SIGNED_DIGITS.fullmatch(whole_text):
            whole = int(whole_text)
            if MIN_WHOLE <= whole <= MAX_WHOLE:
                # "-0.5" has a zero whole part but is still negative
                negative = whole_text.startswith("-")
            else:
                whole = 0

        fraction = 0
        if _DIGITS.fullmatch(fraction_text):
            fraction = int(fraction_text[:AMOUNT_PLACES].ljust(AMOUNT_PLACES, "0"))

        units = abs(whole) * AMOUNT_SCALE + fraction
        return cls(-units if negative else units)

    @property
    def whole(self) -> int:
        """Whole part, truncated toward zero."""
        whole = abs(self.units) // AMOUNT_SCALE
        return -whole if self.units < 0 else whole

    @property
    def fraction(self) -> int:
        """Fractional digits as an integer in [0, AMOUNT_SCALE)."""
        return abs(self.units) % AMOUNT_SCALE

    def is_negative(self) -> bool:
        return self.units < 0

    def to_decimal(self) -> Decimal:
        return Decimal(str(self))

    def __add__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units + other.units)

    def __sub__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units - other.units)

    def __neg__(self) -> Amount:
        return Amount(-self.units)

    def __str__(self) -> str:
        """
        Render as "{whole}.{fraction}" with the fraction zero-padded to four
        digits, e.g. "1.5000" and "-0.0500".

        Amounts are stored normalized to four places, so the padding is what
        keeps "1.05" from printing as "1.500".
        """
        sign = "-" if self.units < 0 else ""
        return f"{sign}{abs(self.whole)}.{self.fraction:0{AMOUNT_PLACES}d}"

    def __repr__(self) -> str:
        return f"Amount({self})"


# ============================================================================
# TRANSACTION RECORD
# ============================================================================

@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """
    One normalized input transaction.

    Attributes:
        kind: What the record does (deposit, dispute, ...)
        client_id: Client whose account the record is applied to (u16)
        tx_id: Transaction id; for references, the id of the referenced record (u32)
        amount: Own amount for deposits/withdrawals, None for references

    This class is immutable (frozen=True) and memory-optimized (slots=True).
    Id ranges are validated in __post_init__; the amount is not, so a
    deposit without an amount can still be represented and rejected later.
    """
    kind: TransactionKind
    client_id: int
    tx_id: int
    amount: Optional[Amount] = None

    def __post_init__(self):
        if not isinstance(self.kind, TransactionKind):
            raise ValueError(f"Record kind must be TransactionKind, got {type(self.kind)}")
        if not 0 <= self.client_id <= MAX_CLIENT_ID:
            raise ValueError(f"client_id out of range: {self.client_id}")
        if not 0 <= self.tx_id <= MAX_TX_ID:
            raise ValueError(f"tx_id out of range: {self.tx_id}")
        if self.amount is not None and not isinstance(self.amount, Amount):
            raise ValueError(f"Record amount must be Amount, got {type(self.amount)}")

    def __repr__(self) -> str:
        amount = f" {self.amount}" if self.amount is not None else ""
        return f"{self.kind.value}(client={self.client_id}, tx={self.tx_id}{amount})"


# ============================================================================
# ACCOUNT STATE
# ============================================================================

@dataclass(slots=True)
class AccountState:
    """
    Balances of a single client.

    Created on first sight of a client with zero balances. Mutated in place
    by the engine; locked is terminal.
    """
    client_id: int
    available: Amount = field(default_factory=Amount.zero)
    held: Amount = field(default_factory=Amount.zero)
    locked: bool = False

    @property
    def total(self) -> Amount:
        """Derived total balance (available + held)."""
        return self.available + self.held
