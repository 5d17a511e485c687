"""Services for the ledger kernel (write side)."""

from ledger_kernel.services.account_service import AccountService
from ledger_kernel.services.admission import TransactionAdmissionValidator
from ledger_kernel.services.client_service import ClientService
from ledger_kernel.services.posting_service import PostingService
from ledger_kernel.services.transaction_writer import TransactionWriter

__all__ = [
    "AccountService",
    "ClientService",
    "PostingService",
    "TransactionAdmissionValidator",
    "TransactionWriter",
]
