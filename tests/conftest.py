"""
conftest.py - Shared pytest fixtures for batchledger tests

Provides common fixtures used across unit, conformance and functional tests:
- Engines (quiet, strict, same-client)
- Funded engines with a few clients already on the books
- CSV file writer for input tests
"""

import pytest
from pathlib import Path
from typing import Callable

from batchledger import (
    Amount, TransactionKind, TransactionRecord, LedgerEngine,
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _record(kind: TransactionKind, client: int, tx: int, amount: str = None) -> TransactionRecord:
    """Create a record, parsing the amount from text if given."""
    return TransactionRecord(kind, client, tx, Amount.parse(amount) if amount is not None else None)


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def engine():
    """Fresh engine that does not print diagnostics."""
    return LedgerEngine(verbose=False)


@pytest.fixture
def strict_engine():
    """Engine that raises on the first rejected record."""
    return LedgerEngine(verbose=False, strict=True)


@pytest.fixture
def same_client_engine():
    """Engine that refuses disputes of other clients' transactions."""
    return LedgerEngine(verbose=False, same_client_disputes=True)


@pytest.fixture
def funded_engine(engine):
    """
    Engine with two funded clients.

    client 1: tx 1 deposit 10.0, tx 2 deposit 2.5 -> available 12.5
    client 2: tx 3 deposit 7.25                    -> available 7.25
    """
    engine.process([
        _record(TransactionKind.DEPOSIT, 1, 1, "10.0"),
        _record(TransactionKind.DEPOSIT, 1, 2, "2.5"),
        _record(TransactionKind.DEPOSIT, 2, 3, "7.25"),
    ])
    return engine


# =============================================================================
# FILE FIXTURES
# =============================================================================

@pytest.fixture
def write_csv(tmp_path) -> Callable[[str], Path]:
    """Return a function that writes CSV text to a temporary file and returns its path."""
    def _write(text: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
