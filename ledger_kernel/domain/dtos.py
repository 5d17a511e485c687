"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable data structures that flow through the posting
    pipeline: ProposedTransaction (caller input), AdmittedTransaction
    (validated, ready to write), and PostedTransaction (persisted result,
    entries annotated with account identity for display).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    from_model() class methods exist as boundary converters but are only
    invoked from the service and selector layers.

Invariants enforced:
    - AdmittedEntry.amount is a positive Decimal; side is an EntrySide.
    - AdmittedTransaction has at least two entries.

Data flow:
    ProposedTransaction -> AdmittedTransaction -> PostedTransaction
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

from ledger_kernel.domain.values import AccountType, EntrySide

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account as AccountModel
    from ledger_kernel.models.client import Client as ClientModel
    from ledger_kernel.models.transaction import (
        LedgerTransaction as LedgerTransactionModel,
    )


# =============================================================================
# Input
# =============================================================================


@dataclass(frozen=True)
class ProposedEntry:
    """
    One unvalidated posting line as supplied by the caller.

    ``amount`` and ``side`` are deliberately loose (``Any``): the admission
    validator is where they are checked and coerced.
    """

    account_id: UUID | str
    amount: Any
    side: Any


@dataclass(frozen=True)
class ProposedTransaction:
    """A journal entry proposal: header fields plus its entries."""

    transaction_date: date
    description: str
    entries: tuple[ProposedEntry, ...]
    reference: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProposedTransaction:
        """
        Build a proposal from the API payload shape::

            {"date": "2025-01-31", "description": "...", "reference": "...",
             "entries": [{"accountId": "...", "amount": "100.00",
                          "side": "DEBIT"}, ...]}

        ``type`` is accepted as an alias of ``side`` on entries.
        """
        raw_date = data["date"]
        if isinstance(raw_date, datetime):
            txn_date = raw_date.date()
        elif isinstance(raw_date, date):
            txn_date = raw_date
        else:
            txn_date = date.fromisoformat(str(raw_date)[:10])

        entries = tuple(
            ProposedEntry(
                account_id=e.get("accountId", e.get("account_id")),
                amount=e.get("amount"),
                side=e.get("side", e.get("type")),
            )
            for e in data.get("entries") or ()
        )
        return cls(
            transaction_date=txn_date,
            description=data.get("description", ""),
            entries=entries,
            reference=data.get("reference"),
        )


# =============================================================================
# Validated
# =============================================================================


@dataclass(frozen=True)
class AdmittedEntry:
    """A structurally valid posting line."""

    account_id: UUID
    amount: Decimal
    side: EntrySide

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError("AdmittedEntry amount must be positive")


@dataclass(frozen=True)
class AdmittedTransaction:
    """
    A proposal that has passed every admission check.

    Only the TransactionWriter consumes this type.
    """

    transaction_date: date
    description: str
    entries: tuple[AdmittedEntry, ...]
    reference: str | None = None
    total_debits: Decimal = Decimal("0")
    total_credits: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if len(self.entries) < 2:
            raise ValueError("AdmittedTransaction requires at least two entries")

    @property
    def account_ids(self) -> frozenset[UUID]:
        return frozenset(e.account_id for e in self.entries)


# =============================================================================
# Persisted
# =============================================================================


@dataclass(frozen=True)
class PostedEntry:
    """A persisted ledger entry annotated with its account for display."""

    entry_id: UUID
    account_id: UUID
    account_code: str
    account_name: str
    account_type: AccountType
    amount: Decimal
    side: EntrySide


@dataclass(frozen=True)
class PostedTransaction:
    """A persisted transaction with its entries."""

    transaction_id: UUID
    client_id: UUID
    transaction_date: date
    description: str
    reference: str | None
    created_at: datetime | None
    entries: tuple[PostedEntry, ...] = field(default_factory=tuple)

    @property
    def total_debits(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.side == EntrySide.DEBIT),
            Decimal("0"),
        )

    @property
    def total_credits(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.side == EntrySide.CREDIT),
            Decimal("0"),
        )

    @classmethod
    def from_model(cls, txn: LedgerTransactionModel) -> PostedTransaction:
        """Convert an ORM transaction (with entries and accounts loaded)."""
        return cls(
            transaction_id=txn.id,
            client_id=txn.client_id,
            transaction_date=txn.transaction_date,
            description=txn.description,
            reference=txn.reference,
            created_at=txn.created_at,
            entries=tuple(
                PostedEntry(
                    entry_id=e.id,
                    account_id=e.account_id,
                    account_code=e.account.code,
                    account_name=e.account.name,
                    account_type=AccountType(e.account.account_type),
                    amount=e.amount,
                    side=EntrySide(e.side),
                )
                for e in sorted(txn.entries, key=lambda e: e.line_seq)
            ),
        )


@dataclass(frozen=True)
class TransactionPage:
    """One page of a tenant's transaction listing."""

    transactions: tuple[PostedTransaction, ...]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class AccountRecord:
    """Read-side view of a chart-of-accounts entry."""

    account_id: UUID
    client_id: UUID
    code: str
    name: str
    account_type: AccountType
    description: str | None
    is_active: bool

    @classmethod
    def from_model(cls, account: AccountModel) -> AccountRecord:
        return cls(
            account_id=account.id,
            client_id=account.client_id,
            code=account.code,
            name=account.name,
            account_type=AccountType(account.account_type),
            description=account.description,
            is_active=account.is_active,
        )


@dataclass(frozen=True)
class ClientRecord:
    """Read-side view of a tenant."""

    client_id: UUID
    name: str
    email: str | None
    phone: str | None
    address: str | None
    is_active: bool

    @classmethod
    def from_model(cls, client: ClientModel) -> ClientRecord:
        return cls(
            client_id=client.id,
            name=client.name,
            email=client.email,
            phone=client.phone,
            address=client.address,
            is_active=client.is_active,
        )
