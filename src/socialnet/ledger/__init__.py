"""Ledger data model: constants, record snapshots and state shape."""
