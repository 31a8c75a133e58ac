"""
io.py - Reading transaction files and rendering account states

Input is a CSV file with a header row and the columns
    type, client, tx, amount
where amount is left empty (or omitted) for dispute, resolve and chargeback.

Output is one header line followed by one line per account, in the order
clients were first seen:
    Client, Available, Held, Total, Locked
    1, 1.5000, 0.0000, 1.5000, false
"""

from __future__ import annotations
import csv
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, TextIO, Union

from .core import (
    Amount, AccountState, TransactionKind, TransactionRecord,
    MalformedRecord, MAX_CLIENT_ID, MAX_TX_ID,
)


ACCOUNTS_HEADER = "Client, Available, Held, Total, Locked"

_UNSIGNED = re.compile(r"\+?[0-9]+")


# ============================================================================
# INPUT
# ============================================================================

def _parse_unsigned(text: str, maximum: int) -> int:
    """Parse an unsigned id field; anything unparseable or out of range is 0."""
    text = text.strip()
    if not _UNSIGNED.fullmatch(text):
        return 0
    value = int(text)
    return value if value <= maximum else 0


def parse_record(fields: Sequence[str]) -> TransactionRecord:
    """
    Map one raw input row to a TransactionRecord.

    Malformed numeric fields never abort the row: ids that do not parse
    become 0 and amounts follow Amount.parse. An empty or missing amount
    field means the record carries no amount.

    Args:
        fields: Row fields in column order (type, client, tx[, amount])

    Returns:
        The normalized TransactionRecord

    Raises:
        MalformedRecord: If the row has fewer than three fields
    """
    if len(fields) < 3:
        raise MalformedRecord(f"expected at least 3 fields, got {len(fields)}: {list(fields)!r}")

    amount: Optional[Amount] = None
    if len(fields) > 3 and fields[3].strip():
        amount = Amount.parse(fields[3])

    return TransactionRecord(
        kind=TransactionKind.from_token(fields[0]),
        client_id=_parse_unsigned(fields[1], MAX_CLIENT_ID),
        tx_id=_parse_unsigned(fields[2], MAX_TX_ID),
        amount=amount,
    )


def _split_row(text: str) -> list:
    return next(csv.reader([text], skipinitialspace=True), [])


def read_transactions(
    path: Union[str, Path],
    verbose: bool = True,
) -> Iterator[TransactionRecord]:
    """
    Read transaction records from a CSV file, in file order.

    The first line is a header and is skipped. Blank rows are ignored.
    Each line is decoded and split on its own, so a row that is not valid
    UTF-8, that the csv module cannot split, or that is too short to map is
    skipped (with a diagnostic on stderr when verbose) and reading goes on.

    Args:
        path: CSV file to read
        verbose: Print a diagnostic for each skipped row (default: True)

    Yields:
        TransactionRecord for every usable row

    Raises:
        OSError: If the file cannot be opened (raised on first iteration)
    """
    with open(path, "rb") as f:
        next(f, None)
        for line_num, raw in enumerate(f, start=2):
            try:
                row = _split_row(raw.decode("utf-8"))
                if not any(field.strip() for field in row):
                    continue
                record = parse_record(row)
            except (UnicodeDecodeError, csv.Error, MalformedRecord) as e:
                if verbose:
                    print(f"⚠️  SKIPPED line {line_num}: {e}", file=sys.stderr)
                continue
            yield record


# ============================================================================
# OUTPUT
# ============================================================================

def format_account(account: AccountState) -> str:
    locked = "true" if account.locked else "false"
    return f"{account.client_id}, {account.available}, {account.held}, {account.total}, {locked}"


def render_accounts(accounts: Iterable[AccountState]) -> Iterator[str]:
    """Yield the header line, then one line per account."""
    yield ACCOUNTS_HEADER
    for account in accounts:
        yield format_account(account)


def write_accounts(accounts: Iterable[AccountState], stream: Optional[TextIO] = None) -> None:
    """Write rendered accounts to a stream (stdout by default)."""
    stream = stream if stream is not None else sys.stdout
    for line in render_accounts(accounts):
        stream.write(line + "\n")
