"""
PostingService -- the single entry point for changing the ledger.

Responsibility:
    Drives a proposed transaction through admission and the writer, and owns
    the unit of work around it: commit on success, rollback on any failure.
    Also the entry point for deleting a posted transaction.

Architecture position:
    Kernel > Services -- imperative shell, owns transaction boundaries.
    Delegates validation to TransactionAdmissionValidator and persistence to
    TransactionWriter.

Invariants enforced:
    - Atomicity: a transaction and all of its entries become visible
      together, or nothing is written.
    - No partial acceptance: any rejection leaves the store unchanged.
    - No retries: a failed write is reported, never re-attempted.

Failure modes:
    - InvalidStructureError, UnknownAccountError, UnbalancedTransactionError
      from admission (logged at WARNING).
    - WriteFailureError after rollback.
    - TransactionNotFoundError / TenantAccessError from delete_transaction().

Audit relevance:
    transaction_post_started / transaction_posted / transaction_rejected are
    logged with the tenant and correlation id bound to the log context.
"""

import logging
import time
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger_kernel.domain.dtos import PostedTransaction, ProposedTransaction
from ledger_kernel.domain.validation import DEFAULT_BALANCE_TOLERANCE
from ledger_kernel.exceptions import (
    TenantAccessError,
    TransactionError,
    WriteFailureError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.services.admission import TransactionAdmissionValidator
from ledger_kernel.services.transaction_writer import TransactionWriter

logger = get_logger("services.posting")


class PostingService:
    """
    Post and delete transactions for a tenant.

    Contract:
        post_transaction() returns a PostedTransaction whose entries carry
        their account code, name and type.  With ``auto_commit=True`` (the
        default) the session is committed before returning and rolled back
        before any exception propagates.  With ``auto_commit=False`` the
        caller owns both.

    Non-goals:
        - No draft or held states, no amendment of posted entries.
        - No idempotency key: posting the same proposal twice creates two
          transactions.
    """

    def __init__(
        self,
        session: Session,
        balance_tolerance: Decimal = DEFAULT_BALANCE_TOLERANCE,
        auto_commit: bool = True,
    ):
        self._session = session
        self._auto_commit = auto_commit
        self._validator = TransactionAdmissionValidator(session, balance_tolerance)
        self._writer = TransactionWriter(session)

    @classmethod
    def from_settings(cls, session: Session, settings, auto_commit: bool = True) -> "PostingService":
        """Build with the balance tolerance from ``LedgerSettings``."""
        return cls(session, settings.balance_tolerance, auto_commit=auto_commit)

    def post_transaction(
        self,
        client_id: UUID,
        proposal: ProposedTransaction,
    ) -> PostedTransaction:
        """
        Validate and persist a transaction.

        Raises:
            TransactionError: The subclass names the failed check.
        """
        with LogContext.bind(
            correlation_id=str(uuid4()),
            client_id=str(client_id),
        ):
            logger.info(
                "transaction_post_started",
                extra={
                    "transaction_date": proposal.transaction_date,
                    "entry_count": len(proposal.entries or ()),
                },
            )
            t0 = time.monotonic()

            try:
                admitted = self._validator.admit(client_id, proposal)
                txn = self._writer.write(client_id, admitted)
                posted = PostedTransaction.from_model(txn)

                if self._auto_commit:
                    self._commit()

            except TransactionError as exc:
                if self._auto_commit:
                    self._session.rollback()
                level = logging.ERROR if isinstance(exc, WriteFailureError) else logging.WARNING
                logger.log(
                    level,
                    "transaction_rejected",
                    extra={"reason_code": exc.code},
                    exc_info=True,
                )
                raise
            except Exception:
                if self._auto_commit:
                    self._session.rollback()
                logger.error("transaction_post_failed", exc_info=True)
                raise

            duration_ms = round((time.monotonic() - t0) * 1000, 2)
            with LogContext.bind(transaction_id=str(posted.transaction_id)):
                logger.info(
                    "transaction_posted",
                    extra={
                        "entry_count": len(posted.entries),
                        "total_debits": posted.total_debits,
                        "duration_ms": duration_ms,
                    },
                )
            return posted

    def delete_transaction(self, client_id: UUID, transaction_id: UUID | str) -> None:
        """
        Remove a transaction and all of its entries.

        Raises:
            TransactionNotFoundError: No such transaction.
            TenantAccessError: The transaction belongs to another tenant.
        """
        with LogContext.bind(
            correlation_id=str(uuid4()),
            client_id=str(client_id),
            transaction_id=str(transaction_id),
        ):
            try:
                self._writer.delete(client_id, transaction_id)
                if self._auto_commit:
                    self._commit()
            except TenantAccessError:
                if self._auto_commit:
                    self._session.rollback()
                logger.warning("transaction_delete_denied", exc_info=True)
                raise
            except Exception:
                if self._auto_commit:
                    self._session.rollback()
                raise

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("transaction_commit_failed", exc_info=True)
            raise WriteFailureError(type(exc).__name__) from exc
