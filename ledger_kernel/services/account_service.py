"""
AccountService -- chart-of-accounts maintenance.

Responsibility:
    Creates, updates and deactivates a tenant's accounts, and seeds a new
    tenant with a standard chart of accounts.

Architecture position:
    Kernel > Services.  Flush-only (see BaseService).  Reads go through
    AccountSelector / ClientSelector.

Invariants enforced:
    - (client_id, code) is unique: checked up front, and an IntegrityError
      from a concurrent insert is reported the same way.
    - account_type, code and client_id never change after creation; only
      name, description and is_active are updatable.
    - Accounts are deactivated, never deleted.

Failure modes:
    - ClientNotFoundError: the tenant does not exist.
    - DuplicateAccountCodeError (ACCOUNT_CODE_EXISTS)
    - ImmutableAccountFieldError (ACCOUNT_FIELD_IMMUTABLE)
    - AccountNotFoundError / TenantAccessError on update and deactivate.
    - ValueError for an empty code/name or an unknown account type.
"""

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ledger_kernel.domain.dtos import AccountRecord
from ledger_kernel.domain.values import AccountType
from ledger_kernel.exceptions import DuplicateAccountCodeError, ImmutableAccountFieldError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import Account
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.selectors.client_selector import ClientSelector
from ledger_kernel.services.base import BaseService

logger = get_logger("services.account")

UPDATABLE_FIELDS = frozenset({"name", "description", "is_active"})


class AccountService(BaseService[Account]):
    """
    Chart-of-accounts write operations.

    Contract:
        Every method takes the requesting client_id.  Returned values are
        AccountRecord DTOs reflecting the flushed state.
    """

    def __init__(self, session: Session):
        super().__init__(session)
        self._accounts = AccountSelector(session)
        self._clients = ClientSelector(session)

    def create_account(
        self,
        client_id: UUID,
        code: str,
        name: str,
        account_type: AccountType | str,
        description: str | None = None,
    ) -> AccountRecord:
        """
        Add an account to the tenant's chart.

        Raises:
            DuplicateAccountCodeError: If the code is already taken by this tenant.
        """
        self._clients.load(client_id)

        code = (code or "").strip()
        name = (name or "").strip()
        if not code:
            raise ValueError("Account code must not be empty")
        if not name:
            raise ValueError("Account name must not be empty")
        acct_type = AccountType.parse(account_type)

        if self._accounts.get_by_code(client_id, code) is not None:
            logger.warning(
                "account_code_conflict",
                extra={"client_id": str(client_id), "account_code": code},
            )
            raise DuplicateAccountCodeError(str(client_id), code)

        account = Account(
            client_id=client_id,
            code=code,
            name=name,
            account_type=acct_type.value,
            description=description.strip() if description else None,
            is_active=True,
        )
        try:
            with self.session.begin_nested():
                self.session.add(account)
                self.session.flush()
        except IntegrityError as exc:
            raise DuplicateAccountCodeError(str(client_id), code) from exc

        logger.info(
            "account_created",
            extra={
                "account_id": str(account.id),
                "account_code": code,
                "account_type": acct_type.value,
            },
        )
        return AccountRecord.from_model(account)

    def update_account(
        self,
        client_id: UUID,
        account_id: UUID | str,
        /,
        **changes: Any,
    ) -> AccountRecord:
        """
        Change an account's name, description and/or active flag.

        Keyword arguments left out are unchanged.  Any other keyword,
        ``account_type`` included, is refused before anything is modified.

        Raises:
            ImmutableAccountFieldError: For a field outside name/description/is_active.
        """
        for field_name in changes:
            if field_name not in UPDATABLE_FIELDS:
                raise ImmutableAccountFieldError(field_name)

        account = self._accounts.load(client_id, account_id)

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValueError("Account name must not be empty")
            account.name = name
        if "description" in changes:
            description = changes["description"]
            account.description = description.strip() if description else None
        if "is_active" in changes:
            account.is_active = bool(changes["is_active"])

        self.session.flush()
        logger.info(
            "account_updated",
            extra={"account_id": str(account.id), "fields": sorted(changes)},
        )
        return AccountRecord.from_model(account)

    def deactivate_account(self, client_id: UUID, account_id: UUID | str) -> AccountRecord:
        """Hide the account from reports.  Existing entries are kept."""
        return self.update_account(client_id, account_id, is_active=False)

    def seed_chart_of_accounts(
        self,
        client_id: UUID,
        chart: Iterable[Mapping[str, Any]],
    ) -> list[AccountRecord]:
        """
        Create every account of ``chart`` the tenant does not have yet.

        Each item needs ``code``, ``name`` and ``type``; ``description`` is
        optional.  Codes already present are skipped, so seeding twice is
        harmless.

        Returns:
            The accounts created by this call, in chart order.
        """
        created: list[AccountRecord] = []
        for item in chart:
            code = str(item["code"]).strip()
            if self._accounts.get_by_code(client_id, code) is not None:
                logger.debug("account_seed_skipped", extra={"account_code": code})
                continue
            created.append(
                self.create_account(
                    client_id,
                    code=code,
                    name=item["name"],
                    account_type=item.get("type", item.get("account_type")),
                    description=item.get("description"),
                )
            )

        logger.info(
            "chart_of_accounts_seeded",
            extra={"client_id": str(client_id), "created_count": len(created)},
        )
        return created
