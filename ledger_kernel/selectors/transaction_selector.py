"""
Module: ledger_kernel.selectors.transaction_selector
Responsibility: Read-only, tenant-scoped access to posted transactions and
    their entries.  Converts ORM models to frozen DTOs.
Architecture position: Kernel > Selectors.  May import from models/, domain/
    and selectors/base.py.

Invariants enforced:
    - Entries within each transaction are ordered by line_seq.
    - Listings are ordered newest first: transaction_date DESC, then
      created_at DESC.
    - Listings and totals only count the requesting tenant's transactions.

Failure modes:
    - TransactionNotFoundError / TenantAccessError from get().
    - ValueError for a negative offset, a non-positive limit, or an
      inverted date window.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ledger_kernel.domain.dtos import PostedTransaction, TransactionPage
from ledger_kernel.exceptions import TransactionNotFoundError
from ledger_kernel.models.transaction import LedgerTransaction
from ledger_kernel.selectors.base import BaseSelector

DEFAULT_PAGE_SIZE = 50


class TransactionSelector(BaseSelector[LedgerTransaction]):
    """
    Selector for transaction queries.

    Guarantees:
        - Eager loading: entries load via selectin, their accounts via a join,
          so building DTOs issues no per-entry queries.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def load(self, client_id: UUID, transaction_id: UUID | str) -> LedgerTransaction:
        """Load the ORM row for a service; tenant-checked."""
        return self._load_owned(
            LedgerTransaction, client_id, transaction_id, TransactionNotFoundError,
        )

    def get(self, client_id: UUID, transaction_id: UUID | str) -> PostedTransaction:
        return PostedTransaction.from_model(self.load(client_id, transaction_id))

    def list(
        self,
        client_id: UUID,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> TransactionPage:
        """
        One page of the tenant's transactions, newest first.

        Args:
            client_id: Requesting tenant.
            start_date: Inclusive lower bound on transaction_date.
            end_date: Inclusive upper bound on transaction_date.
            limit: Page size (> 0).
            offset: Rows to skip (>= 0).
        """
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        if offset < 0:
            raise ValueError(f"offset must not be negative, got {offset}")
        if start_date is not None and end_date is not None and end_date < start_date:
            raise ValueError("end_date must not be before start_date")

        conditions = [LedgerTransaction.client_id == client_id]
        if start_date is not None:
            conditions.append(LedgerTransaction.transaction_date >= start_date)
        if end_date is not None:
            conditions.append(LedgerTransaction.transaction_date <= end_date)

        total = self.session.scalar(
            select(func.count()).select_from(LedgerTransaction).where(*conditions)
        )

        rows = self.session.scalars(
            select(LedgerTransaction)
            .where(*conditions)
            .order_by(
                LedgerTransaction.transaction_date.desc(),
                LedgerTransaction.created_at.desc(),
                LedgerTransaction.id,
            )
            .limit(limit)
            .offset(offset)
        ).all()

        return TransactionPage(
            transactions=tuple(PostedTransaction.from_model(t) for t in rows),
            total=total or 0,
            limit=limit,
            offset=offset,
        )
