"""Pure domain layer - values, balance evaluation, admission checks, DTOs."""

from ledger_kernel.domain.balance import (
    evaluate_account_balance,
    evaluate_balance,
    normal_balance_for,
    side_totals,
)
from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.dtos import (
    AccountRecord,
    ClientRecord,
    AdmittedEntry,
    AdmittedTransaction,
    PostedEntry,
    PostedTransaction,
    ProposedEntry,
    ProposedTransaction,
    TransactionPage,
)
from ledger_kernel.domain.values import AccountType, EntrySide, NormalBalance

__all__ = [
    "AccountType",
    "EntrySide",
    "NormalBalance",
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "evaluate_balance",
    "evaluate_account_balance",
    "normal_balance_for",
    "side_totals",
    "ProposedEntry",
    "ProposedTransaction",
    "AdmittedEntry",
    "AdmittedTransaction",
    "PostedEntry",
    "PostedTransaction",
    "TransactionPage",
    "AccountRecord",
    "ClientRecord",
]
