"""
Module: ledger_kernel.models.transaction
Responsibility: ORM persistence for transactions (journal entry headers) and
    their ledger entries -- the single source of financial truth.
Architecture position: Kernel > Models.  May import from db/ and
    domain/values.py only.  MUST NOT import from services/ or selectors/.

Invariants enforced:
    - Every transaction is stamped with its tenant (client_id).  Entries
      carry no tenant column; they inherit it through the transaction.
    - amount_minor > 0 and side IN ('DEBIT', 'CREDIT') (CHECK constraints).
    - Debits == credits per transaction: checked by the admission validator
      before the write; total_debits / total_credits here are read-side
      conveniences, not write-time guards.
    - Deleting a transaction deletes its entries in the same unit of work
      (ORM delete-orphan cascade plus ON DELETE CASCADE on the FK).
    - Entries are immutable: no service exposes an update path.

Failure modes:
    - IntegrityError when an entry references a missing account, or on a
      CHECK violation.  The TransactionWriter reports it as WRITE_FAILURE.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import TimestampedBase, UUIDString
from ledger_kernel.db.types import money_from_int
from ledger_kernel.domain.values import EntrySide

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account


class LedgerTransaction(TimestampedBase):
    """
    Transaction header -- the atomic unit of double-entry accounting.

    Contract:
        Created together with all of its entries in one unit of work and
        deleted together with them.  There is no draft/held state and no
        amendment: a wrong transaction is deleted and re-posted.

    Guarantees:
        - client_id is never null.
        - entries are loaded eagerly (selectin) in line_seq order.
    """

    __tablename__ = "ledger_transactions"

    __table_args__ = (
        Index("idx_transaction_client_date", "client_id", "transaction_date"),
    )

    # Owning tenant
    client_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("clients.id"),
        nullable=False,
    )

    # Accounting date (drives report windows)
    transaction_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )

    # Optional external reference (invoice number, cheque number, ...)
    reference: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    entries: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="transaction",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="LedgerEntry.line_seq",
    )

    def __repr__(self) -> str:
        return f"<LedgerTransaction {self.id} {self.transaction_date}>"

    @property
    def total_debits(self) -> Decimal:
        """Sum of all debit entry amounts."""
        return sum(
            (e.amount for e in self.entries if e.side == EntrySide.DEBIT),
            Decimal("0"),
        )

    @property
    def total_credits(self) -> Decimal:
        """Sum of all credit entry amounts."""
        return sum(
            (e.amount for e in self.entries if e.side == EntrySide.CREDIT),
            Decimal("0"),
        )

    @property
    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits


class LedgerEntry(TimestampedBase):
    """
    One debit or credit line within a transaction.

    Contract:
        Belongs to exactly one LedgerTransaction and references exactly one
        Account (reference only, not owned).  The amount is stored as
        positive integer minor units; ``amount`` exposes it as Decimal.
    """

    __tablename__ = "ledger_entries"

    __table_args__ = (
        CheckConstraint("amount_minor > 0", name="ck_entry_amount_positive"),
        CheckConstraint("side IN ('DEBIT', 'CREDIT')", name="ck_entry_side"),
        Index("idx_entry_transaction", "transaction_id"),
        Index("idx_entry_account", "account_id"),
    )

    transaction_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("ledger_transactions.id", ondelete="CASCADE"),
        nullable=False,
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
    )

    # Amount in cents, always positive; side determines debit/credit
    amount_minor: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    side: Mapped[EntrySide] = mapped_column(
        String(10),
        nullable=False,
    )

    # Position within the transaction (input order)
    line_seq: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    transaction: Mapped["LedgerTransaction"] = relationship(
        back_populates="entries",
    )

    account: Mapped["Account"] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return f"<LedgerEntry {self.side} {self.amount} -> {self.account_id}>"

    @property
    def amount(self) -> Decimal:
        return money_from_int(self.amount_minor)
