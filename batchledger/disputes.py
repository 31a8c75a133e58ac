"""
disputes.py - Active dispute tracking

A transaction id enters the tracker when a dispute against it is applied and
leaves when the dispute is resolved or charged back. The tracker does not know
which client a dispute belongs to; the engine binds disputes to accounts.
"""

from __future__ import annotations
from typing import Iterator, Set


class DisputeTracker:
    """
    Set of transaction ids currently under dispute.

    At most one active dispute exists per transaction id.
    """

    def __init__(self):
        self._active: Set[int] = set()

    def open(self, tx_id: int) -> bool:
        """
        Start a dispute on a transaction.

        Returns:
            True if the dispute was opened, False if tx_id was already disputed
        """
        if tx_id in self._active:
            return False
        self._active.add(tx_id)
        return True

    def close(self, tx_id: int) -> bool:
        """
        End the dispute on a transaction (resolve or chargeback).

        Returns:
            True if tx_id was under dispute, False otherwise
        """
        if tx_id not in self._active:
            return False
        self._active.remove(tx_id)
        return True

    def is_disputed(self, tx_id: int) -> bool:
        return tx_id in self._active

    def __contains__(self, tx_id: int) -> bool:
        return tx_id in self._active

    def __len__(self) -> int:
        return len(self._active)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._active))

    def __repr__(self) -> str:
        return f"DisputeTracker({sorted(self._active)})"
