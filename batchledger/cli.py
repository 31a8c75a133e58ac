"""
cli.py - Command-line entry point

Usage:
    batchledger transactions.csv > accounts.csv
    python -m batchledger transactions.csv --quiet

Reads one CSV file of transactions, replays it, and prints the final
account states on stdout. Diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .core import LedgerError
from .engine import LedgerEngine
from .io import read_transactions, write_accounts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batchledger",
        description="Replay client transactions and print final account states.",
    )
    parser.add_argument("path", nargs="?", help="CSV file of transactions")
    parser.add_argument(
        "--quiet", action="store_true",
        help="do not print diagnostics for skipped records",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="abort on the first rejected record",
    )
    parser.add_argument(
        "--same-client-disputes", action="store_true",
        help="only allow clients to dispute their own transactions",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit code: 0 on success, 1 if the input cannot be read or
        a strict run hits a rejected record
    """
    args = build_parser().parse_args(argv)
    if args.path is None:
        print("No path for the CSV file provided", file=sys.stderr)
        return 1

    verbose = not args.quiet
    engine = LedgerEngine(
        verbose=verbose,
        strict=args.strict,
        same_client_disputes=args.same_client_disputes,
    )
    try:
        accounts = engine.process(read_transactions(args.path, verbose=verbose))
    except OSError:
        print(f"Could not open transactions file: {args.path}", file=sys.stderr)
        return 1
    except LedgerError as e:
        print(f"Aborted: {e}", file=sys.stderr)
        return 1

    write_accounts(accounts, sys.stdout)
    return 0
