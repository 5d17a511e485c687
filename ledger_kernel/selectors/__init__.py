"""Selectors for the ledger kernel (read side)."""

from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.selectors.client_selector import ClientSelector
from ledger_kernel.selectors.ledger_selector import AccountActivity, LedgerSelector
from ledger_kernel.selectors.transaction_selector import TransactionSelector

__all__ = [
    "AccountSelector",
    "ClientSelector",
    "LedgerSelector",
    "AccountActivity",
    "TransactionSelector",
]
