"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the batch ledger engine.

The tests are organized by invariant:
1. test_balances.py - Deposit sums, no overdraft, conservation of funds
2. test_dispute_lifecycle.py - Dispute/resolve/chargeback accounting and locking
3. test_determinism.py - Reproducible replay

These tests use hypothesis for property-based testing.
"""
