"""
Module: ledger_kernel.models.client
Responsibility: ORM persistence for tenants.  A Client owns every Account and
    Transaction stamped with its id; ledger entries inherit the tenant through
    their transaction.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Clients are deactivated (is_active = False), never deleted, so the
      tenant stamp on historical rows always resolves.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TimestampedBase


class Client(TimestampedBase):
    """A tenant of the bookkeeping application."""

    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Deactivation blocks login for the tenant's users (enforced upstream)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Client {self.id}: {self.name}>"
