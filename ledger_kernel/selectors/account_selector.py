"""
Module: ledger_kernel.selectors.account_selector
Responsibility: Tenant-scoped read access to the chart of accounts, including
    the ownership lookup the admission validator relies on.
Architecture position: Kernel > Selectors.  May import from models/ and
    selectors/base.py.

Invariants enforced:
    - owned_activity() only ever returns ids stamped with the requesting client,
      so an account belonging to another tenant is indistinguishable from a
      missing one.
    - list() ordering is by code ascending.

Failure modes:
    - AccountNotFoundError / TenantAccessError from get().
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.dtos import AccountRecord
from ledger_kernel.domain.values import AccountType
from ledger_kernel.exceptions import AccountNotFoundError
from ledger_kernel.models.account import Account
from ledger_kernel.selectors.base import BaseSelector


class AccountSelector(BaseSelector[Account]):
    """
    Selector for chart-of-accounts queries.

    Contract:
        Every method takes the requesting client_id and never returns rows
        of another tenant.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def load(self, client_id: UUID, account_id: UUID | str) -> Account:
        """Load the ORM row for a service; tenant-checked."""
        return self._load_owned(Account, client_id, account_id, AccountNotFoundError)

    def get(self, client_id: UUID, account_id: UUID | str) -> AccountRecord:
        return AccountRecord.from_model(self.load(client_id, account_id))

    def get_by_code(self, client_id: UUID, code: str) -> AccountRecord | None:
        account = self.session.scalars(
            select(Account).where(
                Account.client_id == client_id,
                Account.code == code,
            )
        ).one_or_none()
        return AccountRecord.from_model(account) if account is not None else None

    def list(
        self,
        client_id: UUID,
        account_type: AccountType | None = None,
        active: bool | None = None,
    ) -> list[AccountRecord]:
        """
        List the tenant's accounts ordered by code.

        Args:
            client_id: Requesting tenant.
            account_type: Optional type filter.
            active: True for active only, False for inactive only, None for all.
        """
        query = select(Account).where(Account.client_id == client_id)

        if account_type is not None:
            query = query.where(Account.account_type == AccountType.parse(account_type).value)

        if active is not None:
            query = query.where(Account.is_active.is_(active))

        rows = self.session.scalars(query.order_by(Account.code)).all()
        return [AccountRecord.from_model(a) for a in rows]

    def owned_activity(self, client_id: UUID, account_ids: Iterable[UUID]) -> dict[UUID, bool]:
        """
        Map each of ``account_ids`` that the tenant owns to its is_active flag.

        One query, regardless of how many ids are asked about.  Ids missing
        from the result are either nonexistent or foreign.
        """
        wanted = set(account_ids)
        if not wanted:
            return {}
        rows = self.session.execute(
            select(Account.id, Account.is_active).where(
                Account.client_id == client_id,
                Account.id.in_(wanted),
            )
        ).all()
        return {account_id: is_active for account_id, is_active in rows}
