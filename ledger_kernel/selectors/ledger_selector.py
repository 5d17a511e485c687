"""
Module: ledger_kernel.selectors.ledger_selector
Responsibility: Read-only per-account activity aggregation for reports.  The
    ledger is a derived view over ledger entries -- there are no stored
    balances anywhere in the system.
Architecture position: Kernel > Selectors.  May import from models/, domain/
    and selectors/base.py.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - No stored balances.  Every figure is summed from ledger_entries rows at
      query time, in exact integer minor units.
    - Tenant scoping: accounts are filtered on client_id, and only entries of
      the same tenant's transactions are joined in.
    - Accounts with no activity in the window still appear (outer join) with
      zero totals; the statement builders decide whether to show them.

Failure modes:
    - Returns an empty list when the tenant has no matching accounts.
    - AccountNotFoundError / TenantAccessError from account_activity().
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from ledger_kernel.db.types import money_from_int
from ledger_kernel.domain.values import AccountType, EntrySide
from ledger_kernel.exceptions import AccountNotFoundError
from ledger_kernel.models.account import Account
from ledger_kernel.models.transaction import LedgerEntry, LedgerTransaction
from ledger_kernel.selectors.base import BaseSelector


@dataclass(frozen=True)
class AccountActivity:
    """Debit and credit totals for one account over a date window."""

    account_id: UUID
    account_code: str
    account_name: str
    account_type: AccountType
    debit_total: Decimal
    credit_total: Decimal

    @property
    def entries(self) -> tuple[tuple[Decimal, EntrySide], ...]:
        """The totals as (amount, side) pairs for the balance evaluator."""
        return (
            (self.debit_total, EntrySide.DEBIT),
            (self.credit_total, EntrySide.CREDIT),
        )


class LedgerSelector(BaseSelector[LedgerEntry]):
    """
    Selector for report aggregation -- the authoritative balance source.

    Contract:
        activity() sums entry amounts per account, grouped by side, for the
        tenant's accounts of the requested types, restricted to transactions
        dated within [start_date, end_date] (either bound optional).

    Guarantees:
        - Totals are exact Decimals converted from integer cents.
        - Results are ordered by account code; type ordering is applied by
          the statement builders.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def _activity_query(
        self,
        client_id: UUID,
        start_date: date | None,
        end_date: date | None,
    ):
        """Subquery of the tenant's entries inside the date window."""
        query = (
            select(
                LedgerEntry.account_id.label("account_id"),
                LedgerEntry.side.label("side"),
                LedgerEntry.amount_minor.label("amount_minor"),
            )
            .join(LedgerTransaction, LedgerEntry.transaction_id == LedgerTransaction.id)
            .where(LedgerTransaction.client_id == client_id)
        )

        if start_date is not None:
            query = query.where(LedgerTransaction.transaction_date >= start_date)

        if end_date is not None:
            query = query.where(LedgerTransaction.transaction_date <= end_date)

        return query.subquery("window_entries")

    def activity(
        self,
        client_id: UUID,
        account_types: Iterable[AccountType] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        active_only: bool = True,
        account_id: UUID | None = None,
    ) -> list[AccountActivity]:
        """
        Per-account debit/credit totals.

        Args:
            client_id: Requesting tenant.
            account_types: Restrict to these types (None = all).
            start_date: Inclusive lower bound on transaction_date.
            end_date: Inclusive upper bound on transaction_date (as-of).
            active_only: Exclude deactivated accounts.
            account_id: Restrict to a single account.

        Returns:
            One AccountActivity per matching account, zero-activity included.
        """
        entries = self._activity_query(client_id, start_date, end_date)

        debit_sum = func.coalesce(
            func.sum(
                case(
                    (entries.c.side == EntrySide.DEBIT.value, entries.c.amount_minor),
                    else_=0,
                )
            ),
            0,
        ).label("debit_minor")

        credit_sum = func.coalesce(
            func.sum(
                case(
                    (entries.c.side == EntrySide.CREDIT.value, entries.c.amount_minor),
                    else_=0,
                )
            ),
            0,
        ).label("credit_minor")

        query = (
            select(
                Account.id,
                Account.code,
                Account.name,
                Account.account_type,
                debit_sum,
                credit_sum,
            )
            .outerjoin(entries, entries.c.account_id == Account.id)
            .where(Account.client_id == client_id)
            .group_by(Account.id, Account.code, Account.name, Account.account_type)
            .order_by(Account.code)
        )

        if account_types is not None:
            query = query.where(
                Account.account_type.in_([AccountType.parse(t).value for t in account_types])
            )

        if active_only:
            query = query.where(Account.is_active.is_(True))

        if account_id is not None:
            query = query.where(Account.id == account_id)

        results = self.session.execute(query).all()

        return [
            AccountActivity(
                account_id=row.id,
                account_code=row.code,
                account_name=row.name,
                account_type=AccountType(row.account_type),
                debit_total=money_from_int(int(row.debit_minor)),
                credit_total=money_from_int(int(row.credit_minor)),
            )
            for row in results
        ]

    def account_activity(
        self,
        client_id: UUID,
        account_id: UUID | str,
        as_of_date: date | None = None,
    ) -> AccountActivity:
        """
        All-time (or as-of) totals for one account, tenant-checked.

        Deactivated accounts are still answered here; only the statements
        exclude them.
        """
        account = self._load_owned(Account, client_id, account_id, AccountNotFoundError)
        rows = self.activity(
            client_id,
            end_date=as_of_date,
            active_only=False,
            account_id=account.id,
        )
        return rows[0]
