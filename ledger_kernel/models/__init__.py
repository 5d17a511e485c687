"""ORM models - tenants, chart of accounts, transactions and entries."""

from ledger_kernel.models.account import Account
from ledger_kernel.models.client import Client
from ledger_kernel.models.transaction import LedgerEntry, LedgerTransaction

__all__ = [
    "Client",
    "Account",
    "LedgerTransaction",
    "LedgerEntry",
]
