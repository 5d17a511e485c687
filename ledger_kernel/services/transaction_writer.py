"""
TransactionWriter -- persists admitted transactions and deletes them.

Responsibility:
    Turns an AdmittedTransaction into one LedgerTransaction row stamped with
    the tenant plus one LedgerEntry row per entry, and removes a transaction
    together with its entries.

Architecture position:
    Kernel > Services.  Flush-only: PostingService (or the caller's
    session_scope) owns commit and rollback.

Invariants enforced:
    - Only AdmittedTransaction is accepted: validation has already run and
      is not repeated here.
    - The header and all entries are added in one flush; there is no point
      at which a header exists without its entries.
    - Amounts are written as integer minor units.
    - Deleting a transaction deletes its entries in the same unit of work.

Failure modes:
    - WriteFailureError (WRITE_FAILURE) wrapping any SQLAlchemyError raised by
      the flush.  The session must then be rolled back by its owner.
    - TransactionNotFoundError / TenantAccessError from delete().
"""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger_kernel.db.types import to_minor_units
from ledger_kernel.domain.dtos import AdmittedTransaction
from ledger_kernel.exceptions import WriteFailureError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.transaction import LedgerEntry, LedgerTransaction
from ledger_kernel.selectors.transaction_selector import TransactionSelector
from ledger_kernel.services.base import BaseService

logger = get_logger("services.transaction_writer")


class TransactionWriter(BaseService[LedgerTransaction]):
    """
    Write side of the ledger.

    Contract:
        write() returns the flushed ORM transaction (ids and server defaults
        populated); delete() returns nothing.  Neither commits.
    """

    def __init__(self, session: Session):
        super().__init__(session)
        self._transactions = TransactionSelector(session)

    def write(self, client_id: UUID, admitted: AdmittedTransaction) -> LedgerTransaction:
        txn = LedgerTransaction(
            client_id=client_id,
            transaction_date=admitted.transaction_date,
            description=admitted.description,
            reference=admitted.reference,
        )
        txn.entries = [
            LedgerEntry(
                account_id=entry.account_id,
                amount_minor=to_minor_units(entry.amount),
                side=entry.side.value,
                line_seq=seq,
            )
            for seq, entry in enumerate(admitted.entries)
        ]

        try:
            self.session.add(txn)
            self.session.flush()
            # Pick up server-side created_at for the returned DTO
            self.session.refresh(txn)
        except SQLAlchemyError as exc:
            logger.error(
                "transaction_write_failed",
                extra={"entry_count": len(admitted.entries)},
                exc_info=True,
            )
            raise WriteFailureError(type(exc).__name__) from exc

        logger.info(
            "transaction_written",
            extra={
                "transaction_id": str(txn.id),
                "entry_count": len(txn.entries),
            },
        )
        return txn

    def delete(self, client_id: UUID, transaction_id: UUID | str) -> None:
        txn = self._transactions.load(client_id, transaction_id)
        entry_count = len(txn.entries)

        try:
            self.session.delete(txn)
            self.session.flush()
        except SQLAlchemyError as exc:
            logger.error("transaction_delete_failed", exc_info=True)
            raise WriteFailureError(type(exc).__name__) from exc

        logger.info(
            "transaction_deleted",
            extra={"transaction_id": str(txn.id), "entry_count": entry_count},
        )
