"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for the Chart of Accounts (COA) -- the target
    of every ledger entry.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - (client_id, code) is unique (uq_account_client_code).
    - account_type is immutable after creation: no service operation
      accepts it on update.
    - Accounts are soft-deactivated, never deleted, so ledger entries always
      resolve their account reference.  The entry FK is ON DELETE RESTRICT.

Failure modes:
    - IntegrityError on a duplicate (client_id, code); AccountService turns
      this into DuplicateAccountCodeError.
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TimestampedBase, UUIDString
from ledger_kernel.domain.balance import normal_balance_for
from ledger_kernel.domain.values import AccountType, NormalBalance


class Account(TimestampedBase):
    """
    Chart of Accounts entry, owned by one tenant.

    Guarantees:
        - code is unique within the owning client.
        - account_type is one of ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE.
        - normal balance is derived from account_type, never stored.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        UniqueConstraint("client_id", "code", name="uq_account_client_code"),
        Index("idx_account_client_type", "client_id", "account_type"),
        Index("idx_account_active", "is_active"),
    )

    # Owning tenant
    client_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("clients.id"),
        nullable=False,
    )

    # Human-readable account code, e.g. "1000"
    code: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Determines statement placement and normal balance
    account_type: Mapped[AccountType] = mapped_column(
        String(20),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        String(1000),
        nullable=True,
    )

    # Inactive accounts are left out of reports and refused by admission
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Account {self.code}: {self.name}>"

    @property
    def normal_balance(self) -> NormalBalance:
        return normal_balance_for(AccountType(self.account_type))

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance == NormalBalance.DEBIT
