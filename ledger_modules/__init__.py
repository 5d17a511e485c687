"""Ledger modules - features built on top of the ledger kernel."""
